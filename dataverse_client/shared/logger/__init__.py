from .setup_logger import setup_logger

__all__ = ["setup_logger"]
