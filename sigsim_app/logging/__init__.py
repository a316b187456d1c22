"""Structured logging setup and signal audit helpers."""
from .config import build_processors, configure_logging, get_logger, get_subsystem_logger

__all__ = ["build_processors", "configure_logging", "get_logger", "get_subsystem_logger"]
