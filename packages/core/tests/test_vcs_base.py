"""Tests for mention extraction and thread resolution shared by VCS backends."""

import pytest
from prnotify_fakes import InMemoryVCS, make_comment

from prnotify_core.vcs.base import extract_mentions, thread_for


class TestExtractMentions:
    def test_single_mention(self):
        assert extract_mentions("@carol please review") == ["carol"]

    def test_multiple_mentions_in_order(self):
        assert extract_mentions("cc @bob and @carol") == ["bob", "carol"]

    def test_repeats_are_dropped(self):
        assert extract_mentions("@bob @carol @bob") == ["bob", "carol"]

    def test_hyphens_and_underscores_allowed(self):
        assert extract_mentions("@jane-doe @john_smith") == ["jane-doe", "john_smith"]

    def test_mention_stops_at_other_characters(self):
        assert extract_mentions("@dave, @erin.") == ["dave", "erin"]

    def test_no_mentions(self):
        assert extract_mentions("looks good to me") == []

    def test_bare_at_sign_is_not_a_mention(self):
        assert extract_mentions("meet @ 5pm") == []

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_text(self, text):
        assert extract_mentions(text) == []


class TestThreadFor:
    def test_flat_thread(self):
        root = make_comment("1", "bob")
        reply = make_comment("2", "carol", in_reply_to="1")
        other = make_comment("3", "dave")
        assert thread_for([root, reply, other], "2") == [root, reply]

    def test_nested_replies_share_root(self):
        a = make_comment("a", "bob")
        b = make_comment("b", "carol", in_reply_to="a")
        c = make_comment("c", "dave", in_reply_to="b")
        assert thread_for([a, b, c], "a") == [a, b, c]
        assert thread_for([a, b, c], "c") == [a, b, c]

    def test_single_comment_thread(self):
        a = make_comment("a", "bob")
        b = make_comment("b", "carol")
        assert thread_for([a, b], "b") == [b]

    def test_unknown_comment_returns_empty(self):
        assert thread_for([make_comment("a", "bob")], "zzz") == []

    def test_reply_to_missing_parent_is_its_own_root(self):
        orphan = make_comment("o", "bob", in_reply_to="deleted")
        child = make_comment("p", "carol", in_reply_to="o")
        assert thread_for([orphan, child], "p") == [orphan, child]

    def test_reply_cycle_is_one_thread(self):
        a = make_comment("a", "bob", in_reply_to="b")
        b = make_comment("b", "carol", in_reply_to="a")
        c = make_comment("c", "dave", in_reply_to="b")
        other = make_comment("d", "erin")
        comments = [a, b, c, other]
        assert thread_for(comments, "a") == [a, b, c]
        assert thread_for(comments, "b") == [a, b, c]
        assert thread_for(comments, "c") == [a, b, c]

    def test_self_reply_terminates(self):
        a = make_comment("a", "bob", in_reply_to="a")
        assert thread_for([a], "a") == [a]


class TestDefaultGetMentions:
    @pytest.mark.asyncio
    async def test_base_get_mentions_uses_extract_mentions(self):
        vcs = InMemoryVCS()
        assert await vcs.get_mentions("hey @bob") == ["bob"]
