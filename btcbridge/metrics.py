"""Prometheus metrics for btcbridge.

This module defines all Prometheus metrics recorded by the redeemers and an
optional standalone HTTP server exposing them, built on prometheus_client's
built-in server.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    Info,
    generate_latest,
    start_http_server,
)

from . import __version__

if TYPE_CHECKING:
    from wsgiref.simple_server import WSGIServer

logger = logging.getLogger(__name__)

# Dedicated registry so embedding applications keep their default one clean
REGISTRY = CollectorRegistry()

APP_INFO = Info(
    "btcbridge_build_info",
    "Build information about btcbridge",
    registry=REGISTRY,
)
APP_INFO.info({"version": __version__, "name": "btcbridge"})

# Redemption metrics
REDEMPTION_REQUESTS_TOTAL = Counter(
    "redemption_requests_total",
    "Total number of redemption requests submitted",
    ["layer", "chain"],
    registry=REGISTRY,
)

REDEMPTION_DURATION_SECONDS = Histogram(
    "redemption_duration_seconds",
    "Time spent submitting redemption requests",
    ["layer"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
    registry=REGISTRY,
)

REDEMPTION_ERRORS_TOTAL = Counter(
    "redemption_errors_total",
    "Total number of failed redemption requests",
    ["layer", "error_type"],
    registry=REGISTRY,
)


def get_metrics_output() -> bytes:
    """Render REGISTRY in the Prometheus text exposition format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Content type matching `get_metrics_output`."""
    return CONTENT_TYPE_LATEST


class MetricsServer:
    """Standalone Prometheus metrics HTTP server.

    Serves `REGISTRY` through prometheus_client.start_http_server, which runs
    in its own daemon thread.
    """

    def __init__(self, host: str = "127.0.0.1", port: int = 9464) -> None:
        self._host = host
        self._port = port
        self._httpd: WSGIServer | None = None
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._httpd is not None

    def start(self) -> None:
        """Start serving metrics."""
        server, thread = start_http_server(
            port=self._port,
            addr=self._host,
            registry=REGISTRY,
        )
        self._httpd = server
        self._thread = thread
        logger.info(f"Metrics server started at http://{self._host}:{self._port}/metrics")

    def stop(self) -> None:
        """Stop the metrics server."""
        if self._httpd is not None:
            try:
                self._httpd.shutdown()
                self._httpd.server_close()
            finally:
                self._httpd = None

        if self._thread is not None:
            self._thread.join(timeout=2)
            self._thread = None

        logger.info("Metrics server stopped")
