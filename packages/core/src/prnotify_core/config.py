import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG_PATH = ".prnotify.yml"

DEFAULT_CONFIG: dict = {
    "store": "noop",  # "noop" | "sqlite" | "gist"
    "store_path": ".prnotify.db",
    "gist_id": None,
    "chat": "console",  # "console" | "webhook"
    "webhook_url": None,
    "webhook_timeout": 10.0,
}


def load_config(config_path: str = DEFAULT_CONFIG_PATH, cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prnotify.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Secrets stay out of the committed config file.
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    webhook_url = os.environ.get("PRNOTIFY_WEBHOOK_URL")
    if webhook_url:
        config["webhook_url"] = webhook_url

    return config
