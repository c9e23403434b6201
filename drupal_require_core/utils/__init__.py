"""Utility modules for logging."""

from .logging import setup_logging, get_log_path

__all__ = ["setup_logging", "get_log_path"]
