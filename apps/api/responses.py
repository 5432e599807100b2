"""Response envelope helpers: {success, data[, count]} / {success, error}."""

from typing import Any, Dict, Optional

from fastapi.encoders import jsonable_encoder


def success(data: Any, count: Optional[int] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True}
    if count is not None:
        body["count"] = count
    body["data"] = jsonable_encoder(data)
    return body


def failure(message: str) -> Dict[str, Any]:
    return {"success": False, "error": message}
