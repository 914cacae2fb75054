from __future__ import annotations

import logging
import re
from typing import Optional

_DEFAULT_FMT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DEFAULT_DATEFMT = "%H:%M:%S"

# urllib3 logs every request line at DEBUG, which would echo SOQL strings.
_QUIET_LOGGERS = ("urllib3.connection", "urllib3.connectionpool")

# "Bearer <tok>", access_token=<tok>, "access_token": "<tok>"
_TOKEN_PATTERNS = (
    re.compile(r"(Bearer\s+)([^\s'\",}]+)"),
    re.compile(r"(access_token=)([^\s&'\",}]+)"),
    re.compile(r"(\"access_token\"\s*:\s*\")([^\"]+)"),
)


def mask_secret(value: Optional[str], *, head: int = 6, tail: int = 4) -> str:
    """Return a log-safe preview of a token, e.g. ``00D5g0...x9Qz``."""
    if not value:
        return "<empty>"
    if len(value) <= head + tail:
        return "*" * len(value)
    return f"{value[:head]}...{value[-tail:]}"


def redact_tokens(text: str) -> str:
    """Mask bearer/access tokens embedded in free text."""
    for pattern in _TOKEN_PATTERNS:
        text = pattern.sub(lambda m: m.group(1) + mask_secret(m.group(2)), text)
    return text


class TokenRedactingFilter(logging.Filter):
    """Rewrites each record's message so access tokens never reach a handler.

    Covers third-party loggers too (e.g. a requests debug hook dumping headers).
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_tokens(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def configure_logging(level: Optional[int]) -> None:
    """Set up root logging for the CLI; safe to call repeatedly.

    The first call installs a stderr handler; later calls only move the level.
    Every root handler gets a :class:`TokenRedactingFilter` exactly once.
    """
    root = logging.getLogger()
    root_level = logging.WARNING if level is None else level

    if not root.handlers:
        logging.basicConfig(format=_DEFAULT_FMT, datefmt=_DEFAULT_DATEFMT)
    root.setLevel(root_level)

    for handler in root.handlers:
        if not any(isinstance(f, TokenRedactingFilter) for f in handler.filters):
            handler.addFilter(TokenRedactingFilter())

    for name in _QUIET_LOGGERS:
        quiet = logging.getLogger(name)
        if quiet.level < logging.WARNING:
            quiet.setLevel(logging.WARNING)
