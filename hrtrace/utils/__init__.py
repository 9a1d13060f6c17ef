"""Miscellaneous helpers."""

from hrtrace.utils.log_config import setup_logging

__all__ = ["setup_logging"]
