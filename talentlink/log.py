"""Centralized logging configuration."""

from __future__ import annotations

import logging
import re
import sys

from talentlink.config import settings

_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"

# /log-in/{database}/{collection}/{email}/{password}
_LOGIN_PASSWORD = re.compile(r"(/log-in/[^/]*/[^/]*/[^/]*/)[^/?\s]*")


def redact_credentials(text: str) -> str:
    """Mask the password segment of any log-in URL in ``text``."""
    return _LOGIN_PASSWORD.sub(r"\1***", text)


class RedactCredentialsFilter(logging.Filter):
    """Masks log-in passwords in a record's message and string arguments."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact_credentials(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                redact_credentials(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


def configure_logging(level_name: str | None = None) -> None:
    """Attach a console handler to the root logger once.

    The uvicorn access log gets a ``RedactCredentialsFilter`` since it records
    the full request path.
    """
    level_name = (level_name or settings.log_level).upper()
    level = getattr(logging, level_name, logging.INFO)

    access = logging.getLogger("uvicorn.access")
    if not any(isinstance(f, RedactCredentialsFilter) for f in access.filters):
        access.addFilter(RedactCredentialsFilter())

    root = logging.getLogger()
    root.setLevel(level)

    if root.handlers:
        return

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FMT))
    root.addHandler(console)
