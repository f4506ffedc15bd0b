"""Loguru logging configuration.

Human-readable stderr output with an opt-in JSON sink, plus an optional
rotating log file when a ``log_dir`` is provided.  Subscriber phone numbers
must never reach a sink in clear text, so every record passes through
:func:`redact_phone` before formatting.
"""

import re
import sys
from pathlib import Path
from typing import Any

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"

# +13075551234, 307-555-1234, (307) 555-1234, 307.555.1234
_PHONE_RE = re.compile(r"(?:\+?1[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?(\d{4})\b")


def redact_phone(text: str) -> str:
    """Mask every phone-number-shaped substring, keeping the last four digits.

    Args:
        text: Arbitrary log text.

    Returns:
        The text with phone numbers replaced by ``***-***-NNNN``.
    """
    return _PHONE_RE.sub(lambda m: f"***-***-{m.group(1)}", text)


def _redacting_patcher(record: dict[str, Any]) -> None:
    record["message"] = redact_phone(record["message"])


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Configure Loguru sinks.

    Args:
        log_level: Minimum log level to emit.
        log_dir: Optional directory for log files.  When set, a rotating
            file sink is added (rotated every 24 hours, retained 7 days).
    """
    logger.remove()
    logger.configure(patcher=_redacting_patcher)
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format=_LOG_FORMAT,
        serialize=False,
    )
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        serialize=True,
        filter=lambda record: record["extra"].get("json_output", False),
    )

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / "wyo-alerts.log",
            level=log_level.upper(),
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
        )
