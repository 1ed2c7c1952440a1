"""Auto-detect the kind of decoded API document."""

from typing import Any

POSTMAN_SCHEMA_HOST = "getpostman.com"


def detect_format(data: Any) -> str:
    """Detect the format of a decoded API document.

    Returns: 'openapi', 'postman', or 'unknown'.
    """
    if not isinstance(data, dict):
        return "unknown"

    if "openapi" in data or "swagger" in data:
        return "openapi"

    info = data.get("info")
    if isinstance(info, dict):
        if "_postman_id" in info:
            return "postman"
        schema = info.get("schema")
        if isinstance(schema, str) and POSTMAN_SCHEMA_HOST in schema:
            return "postman"

    if isinstance(data.get("item"), list):
        return "postman"

    return "unknown"
