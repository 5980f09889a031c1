"""Logging setup and structured log helpers"""

import logging
import sys
from typing import Optional


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output"""

    COLORS = {
        'DEBUG': '\033[36m',  # Cyan
        'INFO': '\033[32m',  # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',  # Red
        'CRITICAL': '\033[35m',  # Magenta
    }

    RESET = '\033[0m'

    def format(self, record):
        # Work on a copy so file handlers sharing the record stay uncolored
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(level: str = 'INFO', log_file: Optional[str] = None, stream=None):
    """Setup logging configuration for the server and the terminal client"""

    formatter = ColoredFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(formatter)

    handlers = [console_handler]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=handlers,
        force=True
    )

    # Reduce noise from external libraries
    for noisy in ('requests', 'urllib3', 'openai', 'httpx', 'httpcore'):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def log_session_transition(from_state: str, to_state: str, trigger: str):
    """Log a session state machine transition"""
    logger = logging.getLogger('session_flow')
    logger.info(f"🔁 {from_state} -> {to_state} ({trigger})")


def log_performance(func_name: str, duration: float, success: bool = True):
    """Log performance metrics"""
    logger = logging.getLogger('performance')
    status = "✅" if success else "❌"
    logger.info(f"{status} {func_name} completed in {duration:.3f}s")
