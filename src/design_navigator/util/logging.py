"""Logging setup shared by the command-line entry points."""

import logging

from rich.logging import RichHandler


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging with a rich handler.

    Args:
        verbose: Log at DEBUG level instead of INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
        force=True,
    )
    # Keep third-party request logs out of normal output
    for noisy_logger in ("httpx", "httpcore", "sentence_transformers"):
        logging.getLogger(noisy_logger).setLevel(
            logging.DEBUG if verbose else logging.WARNING
        )
