"""Router – relay an uploaded file into a Databricks volume."""

from fastapi import APIRouter, Request
from fastapi.responses import Response

from src.volume_relay.services.relay_service import get_upload_relay

router = APIRouter(tags=["Upload"])


async def upload_to_databricks(request: Request) -> Response:
    """
    Upload a file to ``/Volumes/{catalog}/{schema}/default/{filename}``.

    Multipart form fields
    ---------------------
    file             : the file to upload.
    workspace_url    : workspace base URL, e.g. ``https://adb-123.azuredatabricks.net``.
    databricks_token : personal access token used as bearer credential.
    catalog_path     : ``catalog/schema``.

    Registered without a method list: every verb reaches the relay so that
    unsupported ones get the same CORS headers and JSON error shape.
    """
    factory = request.app.dependency_overrides.get(get_upload_relay, get_upload_relay)
    return await factory().handle(request)


router.add_route("/api/upload-to-databricks", upload_to_databricks, include_in_schema=False)
