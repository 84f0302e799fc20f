"""Logging setup shared by the command line inspector and tests.

Call it before importing modules that may configure logging themselves
(matplotlib in particular).
"""
import datetime
import logging
import os
import sys

DEFAULT_FORMAT = "%(asctime)s [%(levelname)-7s] %(filename)s:%(lineno)d %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"


def ensure_logging(level: int = logging.INFO, *, force: bool = False) -> None:
    """Make sure the root logger writes to stdout.

    Installs a handler only when none exists (or when `force` is set);
    otherwise just adjusts the root level. Safe to call multiple times.
    """
    root = logging.getLogger()
    if force or not root.handlers:
        logging.basicConfig(level=level, format=DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT, stream=sys.stdout, force=force)
    else:
        root.setLevel(level)
    logging.getLogger("matplotlib").setLevel(logging.WARNING)


def configure_debug(debug: bool) -> None:
    ensure_logging(logging.DEBUG if debug else logging.INFO)


def configure_run_logging(run_name: str, *, log_dir: str = "results/logs",
                          console_level: int = logging.INFO, file_level: int = logging.DEBUG) -> str:
    """Add a per-run DEBUG file handler next to the console handler.

    The run name only appears in the log file name. Returns the absolute
    path of the log file.
    """
    ensure_logging(level=console_level)

    os.makedirs(log_dir, exist_ok=True)
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    safe_name = "".join(c if c.isalnum() or c in '._-' else '_' for c in (run_name or "run").lower())
    logfile = os.path.join(log_dir, f"{safe_name}_{timestamp}.log")

    root = logging.getLogger()
    file_handler = logging.FileHandler(logfile, mode='a', encoding='utf-8')
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT))
    root.addHandler(file_handler)

    # root passes everything down; each handler filters at its own level
    root.setLevel(min(console_level, file_level))

    return os.path.abspath(logfile)
