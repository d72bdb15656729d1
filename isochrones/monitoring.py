from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from .config import ObservabilityConfig, get_config


def configure_logging(
    config: Optional[ObservabilityConfig] = None,
    level: Optional[str] = None,
) -> None:
    """Configure root logging from the observability settings.

    ``level`` overrides the configured level (e.g. from a CLI flag).
    """
    config = config or get_config().observability
    logging.basicConfig(
        level=(level or config.level).upper(),
        format=config.format,
        force=True,
    )


@contextmanager
def timed(logger: logging.Logger, event: str, **extra: Any) -> Iterator[None]:
    """Log how long the wrapped block took, in milliseconds."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(event, extra={**extra, "elapsed_ms": round(elapsed_ms, 1)})
