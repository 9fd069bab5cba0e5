"""
Settings for the point-of-sale client.

Values come from the environment (optionally a .env file in the working
directory). Everything here is read once at import time; pass explicit
overrides to ApiClient when a different backend is needed at runtime.
"""

import logging.config
import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEBUG = os.getenv("POS_DEBUG", "False") == "True"

# Backend API
API_BASE_URL = os.getenv("POS_API_BASE_URL", "http://localhost:3001").rstrip("/")
API_TIMEOUT = float(os.getenv("POS_API_TIMEOUT", "10"))  # seconds

# Catalog defaults
LOW_STOCK_THRESHOLD = int(os.getenv("POS_LOW_STOCK_THRESHOLD", "10"))
DEFAULT_PROFIT_MARGIN = float(os.getenv("POS_DEFAULT_PROFIT_MARGIN", "20"))

# Dashboards
DASHBOARD_DAYS = int(os.getenv("POS_DASHBOARD_DAYS", "30"))
DASHBOARD_RECENT_SALES = int(os.getenv("POS_DASHBOARD_RECENT_SALES", "5"))

# Number of threads used for concurrent page-load fetches
PAGE_LOAD_WORKERS = int(os.getenv("POS_PAGE_LOAD_WORKERS", "4"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("POS_LOG_FILE", "")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
        },
        "verbose": {
            "format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "level": LOG_LEVEL,
            "class": "logging.StreamHandler",
            "formatter": "verbose" if DEBUG else "json",
        },
    },
    "loggers": {
        "pos_client": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "urllib3": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
    },
}

if LOG_FILE:
    LOGGING["handlers"]["file"] = {
        "level": LOG_LEVEL,
        "class": "logging.handlers.RotatingFileHandler",
        "filename": LOG_FILE,
        "maxBytes": 1024 * 1024 * 10,  # 10 MB
        "backupCount": 10,
        "formatter": "json",
    }
    LOGGING["loggers"]["pos_client"]["handlers"].append("file")


def configure_logging(config=None):
    """
    Apply the logging configuration.

    Library code never calls this on its own; applications embedding the
    client call it once at startup.
    """
    logging.config.dictConfig(config or LOGGING)
