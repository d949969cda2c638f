"""Strict/lenient handling of recoverable anomalies."""

from __future__ import annotations

import logging

from ..config import CodecConfig
from ..exceptions import DbfCodecError


def degrade(
    config: CodecConfig,
    error_class: type[DbfCodecError],
    message: str,
    logger: logging.Logger,
    level: int = logging.DEBUG,
) -> None:
    """Report a recoverable anomaly.

    In strict mode this raises ``error_class(message)``. In lenient mode the
    message is logged and the caller carries on with its fallback value.

    Args:
        config: Active codec configuration
        error_class: Exception raised in strict mode
        message: Description of the anomaly
        logger: Logger of the calling module
        level: Log level used in lenient mode

    Raises:
        DbfCodecError: The given error_class, in strict mode only
    """
    if config.strict:
        raise error_class(message)
    logger.log(level, message)
