import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "drafts": "sqlite",  # "sqlite" persists drafts between runs; "memory" keeps them in-process only
    "drafts_path": ".prbadge.db",
    "repositories": {},  # "owner/name" -> local checkout, for trees spanning several repos
    "project_root": ".",
}


def load_config(config_path: str = ".prbadge.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prbadge.yml in the current directory
      3. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG, "repositories": dict(DEFAULT_CONFIG["repositories"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config
