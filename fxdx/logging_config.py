"""
Logging for the FXDX client and its HTTP transport.

``setup_logging`` wires the ``fxdx`` logger to a rotating ``fxdx.log``
and to the console.  The transport loggers used by httpx (``httpx`` and
``httpcore``) share the file handler at WARNING so connection trouble
lands next to the signed-request trail.

Every record passes through :class:`RedactingFilter`, which masks
``X-Signature`` values and the configured secret before anything is
written.  ``FXDX_LOG_LEVEL`` overrides the file level when set.
"""

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, Optional, Union

LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
LOGGER_NAME = "fxdx"
LOG_FILE_NAME = "fxdx.log"
TRANSPORT_LOGGERS = ("httpx", "httpcore")

_MAX_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 5

_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s.%(funcName)s:%(lineno)d | %(message)s"
_CONSOLE_FORMAT = "%(levelname)-8s | %(message)s"
_MASK = "***"

_SIGNATURE_RE = re.compile(r"((?:X-Signature|signature)['\"]?\s*[:=]\s*['\"]?)[0-9A-Za-z+/=x]+", re.I)


class RedactingFilter(logging.Filter):
    """Mask signatures and known secrets in the rendered message."""

    def __init__(self, secrets: Iterable[Union[str, bytes]] = ()):
        super().__init__()
        self._secrets = []
        for secret in secrets:
            if isinstance(secret, bytes):
                secret = secret.decode("utf-8", "replace")
            if secret:
                self._secrets.append(secret)

    def redact(self, text: str) -> str:
        text = _SIGNATURE_RE.sub(r"\1" + _MASK, text)
        for secret in self._secrets:
            text = text.replace(secret, _MASK)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = self.redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def resolve_level(default: int = logging.DEBUG) -> int:
    """
    Return the level named by ``FXDX_LOG_LEVEL``, or *default*.

    Raises
    ------
    ValueError
        If the variable names no known level.
    """
    name = os.getenv("FXDX_LOG_LEVEL")
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown FXDX_LOG_LEVEL '{name}'.")
    return level


def _file_handler(log_file: Path, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        log_file,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def _console_handler(level: int) -> logging.StreamHandler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    return handler


def _attach_transport(handler: logging.Handler, redactor: RedactingFilter) -> None:
    for name in TRANSPORT_LOGGERS:
        transport = logging.getLogger(name)
        if any(getattr(h, "baseFilename", None) == handler.baseFilename for h in transport.handlers):
            continue
        transport.setLevel(logging.WARNING)
        transport.addFilter(redactor)
        transport.addHandler(handler)


def setup_logging(
    log_level: Optional[int] = None,
    log_dir: Optional[Path] = None,
    console_level: int = logging.INFO,
    secrets: Iterable[Union[str, bytes]] = (),
) -> logging.Logger:
    """
    Configure and return the ``fxdx`` logger.

    Parameters
    ----------
    log_level : int, optional
        Level for the file handler.  Falls back to ``FXDX_LOG_LEVEL``,
        then DEBUG.
    log_dir : Path, optional
        Directory for ``fxdx.log``; defaults to ``LOG_DIR``.
    console_level : int
        Level for the console handler.
    secrets : iterable of str or bytes
        Values masked in every record, typically the HMAC secret.

    Returns
    -------
    logging.Logger
        The ``fxdx`` logger.  Calling again returns it unchanged.
    """
    level = log_level if log_level is not None else resolve_level()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(min(level, console_level))

    # Repeated calls must not stack handlers
    if logger.handlers:
        return logger

    log_dir = Path(log_dir) if log_dir is not None else LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    redactor = RedactingFilter(secrets)
    file_handler = _file_handler(log_file, level)
    logger.addFilter(redactor)
    logger.addHandler(file_handler)
    logger.addHandler(_console_handler(console_level))
    _attach_transport(file_handler, redactor)

    logger.debug("Logging initialised – file: %s level=%s", log_file, logging.getLevelName(level))
    return logger
