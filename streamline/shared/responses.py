"""Standard JSON envelope: {success, message?, data?, error?}"""

from typing import Any, Optional


def success_response(data: Any = None, message: Optional[str] = None) -> dict:
    body: dict = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body


def error_response(message: str, data: Any = None, error: Optional[str] = None) -> dict:
    body: dict = {"success": False, "message": message}
    if data is not None:
        body["data"] = data
    if error is not None:
        body["error"] = error
    return body
