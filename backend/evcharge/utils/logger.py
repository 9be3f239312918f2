"""Logging configuration for the application."""
import logging
import sys

# Configure root logger
logger = logging.getLogger("evcharge")
logger.setLevel(logging.INFO)

# Create console handler
handler = logging.StreamHandler(sys.stdout)

# Create formatter
formatter = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
handler.setFormatter(formatter)

# Add handler to logger if not already added
if not logger.handlers:
    logger.addHandler(handler)

# Prevent duplicate logs
logger.propagate = False


def configure_logging(environment: str) -> None:
    """Set the log level for the given environment."""
    level = logging.DEBUG if environment == "development" else logging.INFO
    logger.setLevel(level)
    handler.setLevel(level)


def log_context(**fields) -> str:
    """
    Render identifying fields as ``key=value`` pairs for log messages.

    Args:
        **fields: Context values (operation, ids, error codes)

    Returns:
        Space separated ``key=value`` string, skipping None values
    """
    return " ".join(f"{key}={value}" for key, value in fields.items() if value is not None)


__all__ = ["logger", "configure_logging", "log_context"]
