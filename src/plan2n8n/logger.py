import logging

from rich.console import Console
from rich.logging import RichHandler


def init_logger(level: str = "INFO") -> None:
    """
    Route the root logger through a single rich handler on stderr, keeping
    stdout free for JSON written by the CLI.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(log_level)

    handler = RichHandler(
        level=log_level, console=Console(stderr=True), show_path=False, rich_tracebacks=True
    )
    handler.setFormatter(logging.Formatter(fmt="[%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))

    # Replace any existing handlers
    root.handlers = [handler]

    for uv_logger in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(uv_logger)
        logger.handlers = [handler]
        logger.setLevel(log_level)
