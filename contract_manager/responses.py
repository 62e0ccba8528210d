"""
Response envelope shared by every endpoint.

    {"success": true, "data": ...}
    {"success": false, "error": {"message": ..., "code": ...}}
"""

from typing import Any, Dict, Optional


def success(data: Any) -> Dict[str, Any]:
    return {"success": True, "data": data}


def failure(
    message: str, code: str, details: Optional[Any] = None
) -> Dict[str, Any]:
    error: Dict[str, Any] = {"message": message, "code": code}
    if details is not None:
        error["details"] = details
    return {"success": False, "error": error}
