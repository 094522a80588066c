import logging
from rich.logging import RichHandler

from studyhub.config import settings

def setup_logging(level: str = None):
    """Route log records through rich; safe to call more than once"""
    root_logger = logging.getLogger()
    root_logger.setLevel((level or settings.log_level).upper())

    if not any(isinstance(h, RichHandler) for h in root_logger.handlers):
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root_logger.addHandler(handler)

    # Keep HTTP client chatter out of the console
    for noisy in ["httpx", "httpcore", "anthropic"]:
        logging.getLogger(noisy).setLevel(logging.WARNING)
