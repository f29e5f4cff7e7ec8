"""Service-level errors mapped to HTTP status codes by the routers."""

from __future__ import annotations

from typing import Any, Dict, Optional


class ServiceError(ValueError):
    status_code = 400

    def __init__(self, message: str, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload or {}

    def to_body(self) -> Dict[str, Any]:
        return {"detail": self.message, **self.payload}


class InvalidRequestError(ServiceError):
    status_code = 400


class ForbiddenError(ServiceError):
    status_code = 403


class NotFoundError(ServiceError):
    status_code = 404
