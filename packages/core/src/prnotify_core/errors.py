"""Errors raised by prnotify itself.

Collaborator failures (GitHub, the settings store, the chat transport) are
not wrapped; they reach the caller as whatever the library raised.
"""

from __future__ import annotations


class PrNotifyError(Exception):
    """Base class for prnotify errors."""


class InternalError(PrNotifyError):
    """An event references data that is inconsistent or missing.

    Raised for a comment whose PR id does not match the PR it was handed with,
    or an event whose PR cannot be found. Not retried; the caller decides
    whether to log, drop or dead-letter the event.
    """
