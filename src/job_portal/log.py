import logging
import os
import sys
import time
from pathlib import Path

_FORMAT = '%(asctime)s  %(levelname)-8s  %(name)s  %(message)s'
_DATE_FMT = '%Y-%m-%d %H:%M:%S'
_configured = False
_console = None


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; configures root handlers on first call."""
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return logging.getLogger(name)


def _configure() -> None:
    global _console
    level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    if root.handlers:
        return

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FMT))
    root.addHandler(console)
    _console = console

    log_dir = os.getenv('JOB_PORTAL_LOG_DIR')
    if not log_dir:
        return
    try:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(path / f"job_portal_{time.strftime('%Y-%m-%d')}.log", encoding='utf-8')
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FMT))
        root.addHandler(fh)
    except OSError as e:
        root.warning('File logging disabled (%s): %s', log_dir, e)


def set_level(level_name: str) -> None:
    """Apply a configured level after startup; the file handler keeps DEBUG."""
    level = getattr(logging, (level_name or 'INFO').upper(), logging.INFO)
    logging.getLogger().setLevel(level)
    if _console is not None:
        _console.setLevel(level)
