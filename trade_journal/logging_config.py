import logging
import sys
from typing import IO, Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(
    level: Union[str, int] = logging.INFO, stream: Optional[IO[str]] = None
) -> None:
    """
    Configure the root logger once for the API and the CLI.

    If handlers are already installed (uvicorn, pytest's caplog), only the
    level is changed so their formatting is left alone.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    if not root.hasHandlers():
        logging.basicConfig(level=level, format=LOG_FORMAT, stream=stream or sys.stdout)
    else:
        root.setLevel(level)
