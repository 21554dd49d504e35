"""Shared logging helpers for capsync."""

from __future__ import annotations

import logging

_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    *,
    level: int | str = logging.INFO,
    force: bool = False,
    log_http: bool = False,
) -> None:
    """Initialise the root logger once with a terse format.

    Capability sync emits its remote-state dumps at DEBUG, so ``level=DEBUG``
    is the switch for troubleshooting a reconciliation. HTTP client loggers stay
    at WARNING unless ``log_http`` is set. Pass ``force=True`` to reconfigure
    during tests or specialised entry points.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    http_level = logging.NOTSET if log_http else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
