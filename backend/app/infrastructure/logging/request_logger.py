"""Colored request logger — ANSI-colored console lines for HTTP traffic.

One line per request, colored by method and status class so reads,
writes and failures stand apart in the terminal:

    🔵 Blue    — GET
    🟢 Green   — POST
    🟡 Yellow  — PUT / PATCH
    🟣 Magenta — DELETE
    🔴 Red     — 5xx responses / unhandled errors
    ⚪ Gray    — Timing
"""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


_METHOD_COLORS: dict[str, str] = {
    "GET": _Colors.BLUE,
    "POST": _Colors.GREEN,
    "PUT": _Colors.YELLOW,
    "PATCH": _Colors.YELLOW,
    "DELETE": _Colors.MAGENTA,
}


def _status_color(status_code: int) -> str:
    if status_code >= 500:
        return _Colors.RED
    if status_code >= 400:
        return _Colors.YELLOW
    return _Colors.GREEN


# ── RequestLogger ────────────────────────────────────────────────────

class RequestLogger:
    """Color-coded access logger for the HTTP API.

    Usage:
        log = RequestLogger()
        log.request_complete("GET", "/api/v1/pets", 200, 0.004)
    """

    def __init__(self, component_name: str = "RequestLogger"):
        self._logger = logging.getLogger(component_name)

    def request_complete(self, method: str, path: str, status_code: int, elapsed: float) -> None:
        """Log a finished request with its status and duration."""
        color = _METHOD_COLORS.get(method, _Colors.WHITE)
        formatted = (
            f"{color}{_Colors.BOLD}{method:<6}{_Colors.RESET} {path} "
            f"{_status_color(status_code)}→ {status_code}{_Colors.RESET} "
            f"{_Colors.GRAY}({elapsed * 1000:.1f} ms){_Colors.RESET}"
        )
        if status_code >= 500:
            self._logger.error(formatted)
        else:
            self._logger.info(formatted)

    def request_failed(self, method: str, path: str, error: Exception, elapsed: float) -> None:
        """Log a request that raised before a response was produced."""
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ {method:<6}{_Colors.RESET} {path} "
            f"{_Colors.RED}{type(error).__name__}: {error}{_Colors.RESET} "
            f"{_Colors.DIM}({elapsed * 1000:.1f} ms){_Colors.RESET}"
        )
        self._logger.error(formatted)

    async def middleware(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """HTTP middleware: time each request and log the outcome.

        Register with ``app.middleware("http")(request_logger.middleware)``.
        """
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            self.request_failed(request.method, request.url.path, e, time.perf_counter() - start)
            raise
        self.request_complete(
            request.method, request.url.path, response.status_code, time.perf_counter() - start
        )
        return response
