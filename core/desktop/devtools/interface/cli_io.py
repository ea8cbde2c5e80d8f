"""JSON envelopes printed by the non-interactive commands."""

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional

STATUS_OK = "OK"
STATUS_ERROR = "ERROR"


def iso_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def envelope(command: str, status: str, message: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {
        "command": command,
        "status": status,
        "message": message,
        "timestamp": iso_timestamp(),
        "payload": dict(payload or {}),
    }


def structured_response(
    command: str,
    *,
    status: str = STATUS_OK,
    message: str = "",
    payload: Optional[Dict[str, Any]] = None,
    exit_code: int = 0,
) -> int:
    """Print the envelope to stdout and hand back the process exit code."""
    print(json.dumps(envelope(command, status, message, payload), ensure_ascii=False, indent=2))
    return exit_code


def structured_error(command: str, message: str, *, payload: Optional[Dict[str, Any]] = None) -> int:
    return structured_response(command, status=STATUS_ERROR, message=message, payload=payload, exit_code=1)


__all__ = ["STATUS_OK", "STATUS_ERROR", "envelope", "iso_timestamp", "structured_response", "structured_error"]
