# Project: aqi-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
config.py — Load and validate the TOML configuration file.

We use tomllib (Python 3.11+ stdlib) so no extra install is needed.
The config path defaults to "config.toml" in the current working directory,
but can be overridden for testing.
"""

import tomllib
from pathlib import Path


DEFAULT_CONFIG_PATH = Path("config.toml")
DEFAULT_TOKEN_FILE = ".aqi_token"
DEFAULT_TIMEOUT_SECONDS = 15
DEFAULT_TITLE = "Air Quality Dashboard"


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> dict:
    """Load and validate a TOML configuration file.

    Optional keys are filled with their defaults.

    Args:
        path: Path to the TOML config file.

    Returns:
        Nested dict of configuration values.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If required keys or sections are missing.
    """
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            "Copy config.toml.example to config.toml and set your API URL."
        )

    with open(path, "rb") as f:
        config = tomllib.load(f)

    _validate(config)

    config["api"].setdefault("token_file", DEFAULT_TOKEN_FILE)
    config["api"].setdefault("timeout", DEFAULT_TIMEOUT_SECONDS)
    config.setdefault("report", {}).setdefault("title", DEFAULT_TITLE)
    return config


def _validate(config: dict) -> None:
    """Validate that all required config sections and keys are present.

    Expected config schema::

        [api]
        url        = <str>   # base URL of the air-data service
        token_file = <str>   # optional, session token location
        timeout    = <int>   # optional, request timeout in seconds

        [report]
        title = <str>        # optional, report heading

        [log]
        path = <str>         # relative or absolute path to the log file

    Args:
        config: Parsed TOML config dict.

    Raises:
        ValueError: If any required section or key is absent.
    """
    required_sections = ["api", "log"]
    for section in required_sections:
        if section not in config:
            raise ValueError(f"Missing required config section: [{section}]")

    if "url" not in config["api"]:
        raise ValueError("Missing required config key: [api].url")
    if "path" not in config["log"]:
        raise ValueError("Missing required config key: [log].path")
