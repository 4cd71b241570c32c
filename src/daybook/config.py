"""Configuration management for Daybook."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DAYBOOK_HOME = Path(os.environ.get("DAYBOOK_HOME", Path.home() / "daybook"))
CONFIG_FILE = DAYBOOK_HOME / "config" / "daybook.conf"
DATA_DIR = DAYBOOK_HOME / "data"


@dataclass
class Config:
    """Daybook configuration."""

    database_path: Path = field(default_factory=lambda: DATA_DIR / "daybook.db")
    page_size: int = 20
    top_tags: int = 10
    busy_timeout: float = 5.0
    log_level: str = "WARNING"


def _parse_value(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _parse_number(key: str, value: str, default, cast):
    try:
        number = cast(value)
    except ValueError:
        logger.warning(f"Invalid {key.upper()} value '{value}', using {default}")
        return default
    if number <= 0:
        logger.warning(f"{key.upper()} must be positive, using {default}")
        return default
    return number


def load_config(path: Path | None = None) -> Config:
    """Load configuration from daybook.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _parse_value(value.strip())

        match key:
            case "database_path":
                if value:
                    config.database_path = Path(value).expanduser()
            case "page_size":
                config.page_size = _parse_number(key, value, config.page_size, int)
            case "top_tags":
                config.top_tags = _parse_number(key, value, config.top_tags, int)
            case "busy_timeout":
                config.busy_timeout = _parse_number(key, value, config.busy_timeout, float)
            case "log_level":
                config.log_level = value.upper() or config.log_level

    return config
