# src/remitcore/shared/logging_conf.py
"""
Logging Configuration - Process-wide Logging for the Transfer Core

Every remitcore module logs through ``logging.getLogger(__name__)``; this
module wires those loggers to their outputs once, at startup. Transfer ids,
provider references, opaque ``acct_`` references and masked account numbers
are what appear in log lines. Raw recipient fields never reach a logger, so
no redaction happens here.

Outputs:
- stdout, unless disabled (REMIT_LOG_STDOUT=false)
- an optional size-rotated file, either LOG_FILE or LOG_DIR/remitcore.log

The HTTP stack under the rate source (urllib3) is held at WARNING so an
hourly rate refresh does not flood INFO output with connection lines.

Files that USE this module:
- remitcore.app (main() configures logging from settings)
- tests.test_app (rotating file output)

Files that this module USES:
- None (standard library logging only)
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "remitcore.log"
QUIET_LOGGERS = ("urllib3",)

PathLike = Union[str, Path]


def resolve_log_path(log_file: Optional[PathLike] = None, log_dir: Optional[PathLike] = None) -> Optional[Path]:
    """
    Pick the log file path from settings.

    LOG_DIR wins over LOG_FILE; with neither set, file logging is off.

    Returns:
        Path of the log file (parent directory created), or None
    """
    if log_dir:
        path = Path(log_dir) / LOG_FILE_NAME
    elif log_file:
        path = Path(log_file)
    else:
        return None
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _stdout_enabled(log_stdout: Optional[bool]) -> bool:
    if log_stdout is not None:
        return log_stdout
    return os.environ.get("REMIT_LOG_STDOUT", "true").lower() == "true"


def setup_logging(
    level=logging.INFO,
    log_file: Optional[PathLike] = None,
    log_dir: Optional[PathLike] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    log_stdout: Optional[bool] = None,
) -> None:
    """
    Configure the root logger for the transfer core.

    Replaces any handlers already on the root logger, so calling it twice
    does not duplicate output.

    Args:
        level: Root logging level (default: logging.INFO)
        log_file: Log file path (LOG_FILE)
        log_dir: Directory for remitcore.log (LOG_DIR, takes precedence)
        max_bytes: Size at which the file rotates (default: 10MB)
        backup_count: Rotated files kept (default: 5)
        log_stdout: Log to stdout; None reads REMIT_LOG_STDOUT (default true)
    """
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    handlers: List[logging.Handler] = []

    if _stdout_enabled(log_stdout):
        handlers.append(logging.StreamHandler(sys.stdout))

    log_path = resolve_log_path(log_file, log_dir)
    if log_path is not None:
        handlers.append(RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8",
        ))

    # Something must receive errors even with stdout off and no file
    if not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    for handler in handlers:
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, level))

    logging.getLogger(__name__).info(
        "Logging configured: stdout=%s file=%s level=%s",
        _stdout_enabled(log_stdout), log_path or "-", logging.getLevelName(level),
    )
