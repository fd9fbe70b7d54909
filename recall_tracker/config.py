"""Configuration management.

Loads configuration from environment variables (and a local .env file) with
sensible defaults.
"""

import os
import logging
from dataclasses import dataclass, fields
from typing import Dict

from dotenv import load_dotenv

logger = logging.getLogger("Config")

# Dataclass field -> environment variable
ENV_VARS: Dict[str, str] = {
    "api_url": "RECALL_API_URL",
    "request_timeout": "RECALL_REQUEST_TIMEOUT",
    "page_size": "RECALL_PAGE_SIZE",
    "max_recalls": "RECALL_MAX_RECALLS",
    "search_debounce": "RECALL_SEARCH_DEBOUNCE",
    "fuzzy_threshold": "RECALL_FUZZY_THRESHOLD",
    "data_dir": "RECALL_DATA_DIR",
    "log_level": "LOG_LEVEL",
}


@dataclass
class AppConfig:
    """Recall Tracker configuration."""

    api_url: str = "https://www.saferproducts.gov/RestWebServices/Recall"
    request_timeout: float = 30.0
    page_size: int = 25
    max_recalls: int = 200
    search_debounce: float = 0.3
    fuzzy_threshold: float = 0.7
    data_dir: str = "data"
    log_level: str = "info"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        Load configuration from environment variables.

        Values that cannot be converted to the field's type are logged and
        replaced by the default.

        Returns:
            The loaded configuration
        """
        load_dotenv()

        values = {}
        for field in fields(cls):
            raw = os.getenv(ENV_VARS[field.name])
            if raw is None:
                continue
            try:
                values[field.name] = field.type(raw) if field.type in (int, float) else raw
            except ValueError:
                logger.warning(
                    f"Invalid value {raw!r} for {ENV_VARS[field.name]}, using default {field.default!r}"
                )

        if "log_level" in values:
            values["log_level"] = values["log_level"].lower()
        return cls(**values)
