"""
Logging configuration for production
"""
import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(debug: bool = False, log_dir: str = "logs") -> logging.Logger:
    """Attach console and file handlers to the root logger"""
    logs_path = Path(log_dir)
    logs_path.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    
    # Errors only
    error_handler = logging.FileHandler(logs_path / "error.log")
    error_handler.setLevel(logging.ERROR)
    
    # Orders, uploads, moderation decisions
    file_handler = logging.FileHandler(logs_path / "app.log")
    file_handler.setLevel(logging.INFO)
    
    for handler in (console_handler, error_handler, file_handler):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    
    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    
    return root_logger
