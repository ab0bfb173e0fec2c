"""Failures the upload relay reports back to the client as JSON."""

from __future__ import annotations

from src.volume_relay.config import REQUIRED_FIELDS
from src.volume_relay.schemas.upload import UploadErrorResponse, UpstreamErrorDetails


class RelayError(Exception):
    """Base class – carries the HTTP status the client receives."""

    status_code: int = 500

    def __init__(self, message: str, details: UpstreamErrorDetails | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_response(self) -> UploadErrorResponse:
        return UploadErrorResponse(error=self.message, details=self.details)


class MethodNotAllowed(RelayError):
    status_code = 405

    def __init__(self) -> None:
        super().__init__("Method not allowed")


class MissingFields(RelayError):
    status_code = 400

    def __init__(self) -> None:
        *head, last = REQUIRED_FIELDS
        super().__init__(f"Missing required fields: {', '.join(head)}, or {last}")


class InvalidCatalogPath(RelayError):
    status_code = 400

    def __init__(self) -> None:
        super().__init__("Invalid catalog_path format. Expected: catalog/schema")


class UpstreamUploadFailed(RelayError):
    status_code = 500

    def __init__(self, status: int, status_text: str, body: str, volume_path: str) -> None:
        super().__init__(
            f"Databricks upload failed: {status} - {body}",
            details=UpstreamErrorDetails(
                status=status,
                statusText=status_text,
                volumePath=volume_path,
            ),
        )
