"""Error types shared by services and routers."""

from __future__ import annotations


class ServiceError(Exception):
    """Expected failure carrying the message and HTTP status sent to the client."""

    status_code = 400
    code = "invalid"

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"error": self.message}
