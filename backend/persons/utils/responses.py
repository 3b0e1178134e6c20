from typing import Any, Mapping

SUCCESS_CODE = 0


def success_response(
    data: Any, msg: str = "ok", code: int = SUCCESS_CODE
) -> dict[str, Any]:
    """Return payload formatted per project contract."""
    return {"code": code, "msg": msg, "data": data}


def error_response(msg: str, code: int = 10001, data: Any = None) -> dict[str, Any]:
    return {"code": code, "msg": msg, "data": data}


def unwrap_data(payload: Any) -> Any:
    """Return the ``data`` member of an envelope, or the payload itself."""

    if isinstance(payload, Mapping) and "data" in payload and "code" in payload:
        return payload["data"]
    return payload
