"""pixx.io error payload model."""

from dataclasses import dataclass
from typing import Any

import httpx


def is_truthy_flag(value: Any) -> bool:
    """Interpret a pixx.io boolean flag, which the API sends as ``true`` or ``"true"``."""
    if isinstance(value, str):
        return value.lower() == "true"
    return value is True


@dataclass
class ErrorPayload:
    """Error details from a pixx.io JSON response.

    pixx.io reports failures as ``{"success": "false", "errorcode": ..., "errormessage": ...}``,
    sometimes with a 2xx status.
    """

    error_code: str | None = None
    error_message: str | None = None
    status: int | None = None

    # Remaining fields from the payload
    extensions: dict[str, Any] | None = None

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ErrorPayload | None":
        """Parse pixx.io error details from HTTP response.

        Args:
            response: HTTP response object

        Returns:
            ErrorPayload object or None if the body is not a pixx.io error payload
        """
        try:
            data = response.json()
        except (ValueError, TypeError, AttributeError):
            return None

        if not isinstance(data, dict):
            return None

        known_fields = {"success", "errorcode", "errormessage"}
        if "errorcode" not in data and "errormessage" not in data:
            return None

        error_code = data.get("errorcode")
        extensions = {k: v for k, v in data.items() if k not in known_fields}

        return cls(
            error_code=str(error_code) if error_code is not None else None,
            error_message=data.get("errormessage"),
            status=response.status_code,
            extensions=extensions if extensions else None,
        )

    def to_exception_message(self) -> str:
        """Convert the payload to an exception message."""
        if self.error_message and self.error_code:
            return f"{self.error_message} (error code {self.error_code})"
        if self.error_message:
            return self.error_message
        if self.error_code:
            return f"pixx.io error code {self.error_code}"
        return "Unknown pixx.io API error"
