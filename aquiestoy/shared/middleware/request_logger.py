# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, Response, g, request

from aquiestoy.shared.logging import clear_correlation_id, logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"

_REDACTED_HEADERS = frozenset({"authorization", "cookie", "x-api-key", "x-auth-token"})


def _remote_addr() -> str:
    chain = request.headers.get("X-Forwarded-For", "")
    first_hop = chain.split(",", 1)[0].strip()
    return first_hop or request.remote_addr or "unknown"


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _loggable_headers() -> dict[str, str]:
    return {
        name: _fingerprint(value) if name.lower() in _REDACTED_HEADERS else value
        for name, value in request.headers.items()
    }


def _elapsed_ms() -> float:
    started = g.get("request_started", time.perf_counter())
    return (time.perf_counter() - started) * 1000.0


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    """One line per request and one per response, tagged with the request id.

    The id comes from the caller's ``X-Request-ID`` when present and is echoed
    back on the response.
    """

    @app.before_request
    def _open_request() -> None:
        request_id = request.headers.get(REQUEST_ID_HEADER) or secrets.token_urlsafe(8)
        set_correlation_id(request_id)
        g.request_id = request_id
        g.request_started = time.perf_counter()

        if debug_mode:
            logger.debug(
                f"--> {request.method} {request.full_path.rstrip('?')} from {_remote_addr()} "
                f"headers={_loggable_headers()} bytes={request.content_length or 0}"
            )
        else:
            logger.info(f"--> {request.method} {request.path} from {_remote_addr()}")

    @app.after_request
    def _close_request(response: Response) -> Response:
        user = g.get("user_id")
        logger.info(
            f"<-- {request.method} {request.path} {response.status_code} "
            f"{_elapsed_ms():.1f}ms" + (f" user={user}" if user is not None else "")
        )
        response.headers.setdefault(REQUEST_ID_HEADER, g.get("request_id", "-"))
        return response

    @app.teardown_request
    def _release_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"request aborted by {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
