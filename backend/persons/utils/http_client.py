from __future__ import annotations

from typing import Any, Mapping

import httpx
from fastapi import FastAPI
from httpx import ASGITransport


def build_async_client(
    base_url: str,
    *,
    app: FastAPI | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    headers: Mapping[str, str] | None = None,
    timeout_s: float = 10.0,
) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` for a remote base URL or an in-process app."""

    client_kwargs: dict[str, Any] = {
        "timeout": httpx.Timeout(timeout_s),
        "headers": dict(headers or {}),
    }
    if app is not None:
        client_kwargs["transport"] = ASGITransport(app=app)
        client_kwargs["base_url"] = base_url.rstrip("/") or "http://testserver"
    else:
        if transport is not None:
            client_kwargs["transport"] = transport
        client_kwargs["base_url"] = base_url.rstrip("/")
    return httpx.AsyncClient(**client_kwargs)
