from __future__ import annotations

import logging
import os
from pathlib import Path

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
CONSOLE_FORMAT = "%(levelname)s %(message)s"


def _file_handler(path: str) -> logging.Handler:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
    return handler


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Attach a file handler and a console handler to the root logger.

    The operator watches the console; the file (by default under
    ~/.booth-setup/) keeps timestamped records across re-runs, since every
    run appends. `~` in log_path is expanded. When the directory cannot be
    created or the file cannot be opened, booth-setup.log in the working
    directory is used instead. Calling this twice keeps the first setup and
    only adjusts the level.

    Returns the path of the log file actually written.
    """

    root = logging.getLogger()
    root.setLevel(level)

    if getattr(root, "_booth_setup_log_path", None):
        return root._booth_setup_log_path  # type: ignore[attr-defined]

    requested = os.path.expanduser(log_path)
    fallback_reason = None
    try:
        file_handler = _file_handler(requested)
        actual = requested
    except OSError as e:
        actual = str(Path.cwd() / "booth-setup.log")
        file_handler = _file_handler(actual)
        fallback_reason = e
    root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root.addHandler(console)

    root._booth_setup_log_path = actual  # type: ignore[attr-defined]
    if fallback_reason is not None:
        logging.getLogger(__name__).warning("Cannot log to %s (%s)", requested, fallback_reason)
    logging.getLogger(__name__).info("Logging to %s", actual)
    return actual
