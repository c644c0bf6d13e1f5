import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    root = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    if root.handlers:
        root.setLevel(level)
        return  # already configured

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
    )
