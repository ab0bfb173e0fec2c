from typing import Any

from pydantic import BaseModel, Field


class UploadedFileInfo(BaseModel):
    """Where the relayed file landed in the workspace."""
    name: str
    path: str
    size: int
    catalog: str
    schema_: str = Field(serialization_alias="schema")


class UploadSuccessResponse(BaseModel):
    """Response schema for a successful POST /api/upload-to-databricks."""
    success: bool = True
    file: UploadedFileInfo
    message: str = "File uploaded successfully to Databricks"


class UpstreamErrorDetails(BaseModel):
    """Diagnostics copied from a rejected remote upload."""
    status: int
    statusText: str
    volumePath: str


class UploadErrorResponse(BaseModel):
    """Response schema for every failed request."""
    success: bool = False
    error: str
    details: UpstreamErrorDetails | None = None
    stack: str | None = None

    def to_content(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
