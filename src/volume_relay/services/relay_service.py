"""Service layer – relay a multipart upload into a Databricks volume.

One request produces at most one outbound ``PUT`` against the workspace
Files API.  Nothing is cached between requests; every failure is reported
to the caller as JSON and never retried.
"""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass
from typing import Any

import httpx
from starlette.datastructures import FormData, UploadFile
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from src.volume_relay.config import DEFAULT_FILE_NAME, FILES_API_PREFIX, settings
from src.volume_relay.errors import (
    InvalidCatalogPath,
    MethodNotAllowed,
    MissingFields,
    RelayError,
    UpstreamUploadFailed,
)
from src.volume_relay.schemas.upload import (
    UploadedFileInfo,
    UploadErrorResponse,
    UploadSuccessResponse,
)

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Request parsing helpers
# ──────────────────────────────────────────────
def first_or_self(value: Any) -> Any:
    """Collapse a repeated form field to its first value."""
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


@dataclass(frozen=True)
class CatalogPath:
    """``catalog/schema`` pair addressing a volume namespace."""

    catalog: str
    schema: str

    @classmethod
    def parse(cls, value: str) -> CatalogPath:
        # Anything after a second "/" is dropped.
        parts = value.split("/")
        catalog = parts[0]
        schema = parts[1] if len(parts) > 1 else ""
        if not catalog or not schema:
            raise InvalidCatalogPath()
        return cls(catalog=catalog, schema=schema)


@dataclass
class UploadRequest:
    file: UploadFile
    workspace_url: str
    auth_token: str
    catalog_path: str


def build_volume_path(catalog_path: CatalogPath, file_name: str) -> str:
    """Volume location for *file_name*; segments are interpolated as given."""
    return f"/Volumes/{catalog_path.catalog}/{catalog_path.schema}/default/{file_name}"


def _text_field(form: FormData, name: str) -> str | None:
    # File parts sharing the name are not text values.
    value = first_or_self([v for v in form.getlist(name) if isinstance(v, str)])
    return value or None


def extract_upload_request(form: FormData) -> UploadRequest:
    """Pull the file and the three string fields out of a parsed form.

    Text parts and file parts are kept apart, as if the parser returned
    separate field and file maps.  Raises ``MissingFields`` when any value
    is absent or empty, or when ``file`` only arrived as plain text.
    """
    file = first_or_self([v for v in form.getlist("file") if isinstance(v, UploadFile)])
    workspace_url = _text_field(form, "workspace_url")
    auth_token = _text_field(form, "databricks_token")
    catalog_path = _text_field(form, "catalog_path")

    if file is None or not workspace_url or not auth_token or not catalog_path:
        raise MissingFields()

    return UploadRequest(
        file=file,
        workspace_url=workspace_url,
        auth_token=auth_token,
        catalog_path=catalog_path,
    )


# ──────────────────────────────────────────────
# Relay
# ──────────────────────────────────────────────
class UploadRelay:
    """Forward one uploaded file to ``{workspace}/api/2.0/fs/files/Volumes/...``.

    Parameters
    ----------
    expose_traces : include the formatted traceback in unhandled-error bodies.
    timeout       : seconds to wait on the workspace, ``None`` waits forever.
    cors_headers  : headers attached to every response.
    transport     : optional ``httpx`` transport (tests plug a mock in here).
    """

    def __init__(
        self,
        *,
        expose_traces: bool = False,
        timeout: float | None = None,
        cors_headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.expose_traces = expose_traces
        self.timeout = timeout
        self.cors_headers = dict(cors_headers or {})
        self.transport = transport

    async def handle(self, request: Request) -> Response:
        """Answer one inbound request; every failure becomes a JSON body."""
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=self.cors_headers)

        try:
            if request.method != "POST":
                raise MethodNotAllowed()

            async with request.form() as form:
                upload_request = extract_upload_request(form)
                result = await self.relay(upload_request)
        except RelayError as exc:
            return self._json(exc.status_code, exc.to_response().to_content())
        except Exception as exc:
            logger.exception("Upload relay failed: %s", exc)
            body = UploadErrorResponse(
                error=str(exc) or "Unknown error occurred",
                stack=traceback.format_exc() if self.expose_traces else None,
            )
            return self._json(500, body.to_content())

        return self._json(200, result.model_dump(by_alias=True))

    async def relay(self, upload_request: UploadRequest) -> UploadSuccessResponse:
        """Validate the destination, read the file and PUT it to the workspace."""
        catalog_path = CatalogPath.parse(upload_request.catalog_path)

        upload = upload_request.file
        content = await upload.read()
        size = upload.size if upload.size is not None else len(content)

        file_name = upload.filename or DEFAULT_FILE_NAME
        volume_path = build_volume_path(catalog_path, file_name)
        upload_url = f"{upload_request.workspace_url}{FILES_API_PREFIX}{volume_path}"
        logger.info("🚀 Uploading to: %s", upload_url)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.put(
                upload_url,
                content=content,
                headers={
                    "Authorization": f"Bearer {upload_request.auth_token}",
                    "Content-Type": "application/octet-stream",
                },
            )

        if not response.is_success:
            error_text = response.text
            logger.error("Databricks API Error (%s): %s", response.status_code, error_text)
            raise UpstreamUploadFailed(
                status=response.status_code,
                status_text=response.reason_phrase,
                body=error_text,
                volume_path=volume_path,
            )

        logger.info("✅ Uploaded %d bytes to %s", size, volume_path)
        return UploadSuccessResponse(
            file=UploadedFileInfo(
                name=file_name,
                path=volume_path,
                size=size,
                catalog=catalog_path.catalog,
                schema_=catalog_path.schema,
            ),
        )

    def _json(self, status_code: int, content: dict[str, Any]) -> JSONResponse:
        return JSONResponse(status_code=status_code, content=content, headers=self.cors_headers)


def get_upload_relay() -> UploadRelay:
    """FastAPI dependency – a relay configured from the global settings."""
    return UploadRelay(
        expose_traces=settings.expose_error_traces,
        timeout=settings.upstream_timeout,
        cors_headers=settings.cors_headers,
    )
