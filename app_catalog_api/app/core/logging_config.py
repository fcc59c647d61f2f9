"""
Logging configuration for the catalog service.

``setup_logging`` configures the root logger once per process with a
console handler and, when ``LOG_FILE`` is set, a file handler.
``resolve_log_level`` turns the ``LOG_LEVEL`` setting into a numeric
level; the same value is handed to uvicorn by ``run.py``.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(level: Union[str, int, None]) -> int:
    """Return the numeric level for ``level``.

    Level names are matched case insensitively (``"debug"``, ``"Warn"``)
    and numeric strings such as ``"15"`` are used as is.  Anything else
    resolves to ``logging.INFO``.
    """
    if isinstance(level, int):
        return level
    text = (level or "").strip()
    if text.isdigit():
        return int(text)
    numeric = logging.getLevelName(text.upper())
    # getLevelName returns "Level <name>" for names it does not know.
    return numeric if isinstance(numeric, int) else logging.INFO


def build_handlers(logfile: Optional[str] = None) -> List[logging.Handler]:
    """Console handler plus an optional UTF-8 file handler, all sharing one format."""
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger unless something already did.

    Parameters
    ----------
    level : str
        ``LOG_LEVEL`` value, see :func:`resolve_log_level`.  An
        unrecognised value is logged as a warning once handlers exist.
    logfile : Optional[str]
        Path of a log file.  If omitted or empty, only the console is used.
    """
    root = logging.getLogger()
    if root.handlers:
        # uvicorn, pytest or an earlier create_app() got there first.
        return

    numeric_level = resolve_log_level(level)
    root.setLevel(numeric_level)
    for handler in build_handlers(logfile):
        root.addHandler(handler)

    text = str(level).strip()
    if not text.isdigit() and not isinstance(logging.getLevelName(text.upper()), int):
        logging.getLogger(__name__).warning("Unknown log level %r, using INFO", level)
