"""Request and correlation id middleware (raw ASGI).

Both ids are echoed on the response and stored on scope["state"] so handlers
and log lines can reference them. Client-supplied values are accepted only when
short and made of [A-Za-z0-9_-]; anything else is replaced to keep logs clean.
"""

import re
import uuid
from collections.abc import Callable

ID_MAX_LENGTH = 64
_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,%d}$" % ID_MAX_LENGTH)


def _get_header(scope: dict, name: str) -> str | None:
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def _clean_id(raw: str | None) -> str | None:
    if raw and _ID_PATTERN.match(raw.strip()):
        return raw.strip()
    return None


def _with_header(send: Callable, header_name: str, value: str) -> Callable:
    async def send_wrapper(message: dict) -> None:
        if message["type"] == "http.response.start":
            headers = list(message.get("headers", []))
            headers.append((header_name.encode(), value.encode()))
            message["headers"] = headers
        await send(message)

    return send_wrapper


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Forward a valid client request id or generate one."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = _clean_id(_get_header(scope, header_name)) or str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id
        await app(scope, receive, _with_header(send, header_name, request_id))

    return asgi_app


def CorrelationIDMiddleware(
    app: Callable, header_name: str = "X-Correlation-ID"
) -> Callable:
    """Forward a valid client correlation id, else reuse the request id, else generate one."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        correlation_id = (
            _clean_id(_get_header(scope, header_name))
            or scope.get("state", {}).get("request_id")
            or str(uuid.uuid4())
        )
        scope.setdefault("state", {})["correlation_id"] = correlation_id
        await app(scope, receive, _with_header(send, header_name, correlation_id))

    return asgi_app
