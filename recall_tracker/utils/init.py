import os
import logging
from dataclasses import fields
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from recall_tracker.config import ENV_VARS, AppConfig

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger("InitUtil")


def configure_logging(level: str = "info", log_file: Optional[str] = None) -> None:
    """
    Configure root logging once for the whole application.

    Args:
        level: Log level name (e.g. "info", "debug")
        log_file: Optional path of a log file written alongside the console output
    """
    handlers = [logging.StreamHandler()]
    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers
    )


def init_application(data_dir: str = "data", log_level: str = "info", log_file: Optional[str] = None) -> bool:
    """
    Initialize the application by loading .env, configuring logging and creating directories.

    Args:
        data_dir: Directory where saved recalls are persisted
        log_level: Log level name
        log_file: Optional log file path

    Returns:
        bool: True if initialization succeeded, False otherwise
    """
    try:
        load_dotenv()
        configure_logging(log_level, log_file)

        os.makedirs(data_dir, exist_ok=True)
        logger.info(f"Ensured directory exists: {data_dir}")

        return True

    except OSError as e:
        logger.error(f"Error during application initialization: {e}")
        return False


def write_env_example(directory: str = ".", overwrite: bool = False) -> Optional[Path]:
    """
    Write a .env.example listing every setting with its default value.

    Args:
        directory: Where to write the file
        overwrite: Replace an existing .env.example

    Returns:
        Path of the written file, or None if one already existed
    """
    example_path = Path(directory) / ".env.example"
    if example_path.exists() and not overwrite:
        logger.info(f"{example_path} already exists, leaving it untouched")
        return None

    defaults = AppConfig()
    lines = ["# Recall Tracker settings. Copy to .env and adjust."]
    for field in fields(AppConfig):
        lines.append(f"{ENV_VARS[field.name]}={getattr(defaults, field.name)}")

    example_path.write_text("\n".join(lines) + "\n")
    logger.info(f"Wrote {example_path}")
    return example_path
