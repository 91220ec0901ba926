"""Schemas for the DOCX generation endpoint."""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictStr

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class GenerateDocxRequest(BaseModel):
    text: StrictStr = Field(
        ...,
        description="Markup to convert: <p>, <a>, <ul>/<ol>/<li>, <table> plus **bold**, "
        "{red}...{/red} and [label](url) inline markers.",
    )


class GenerateDocxResponse(BaseModel):
    file: str = Field(..., description="DOCX document, base64 without a data: prefix")


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human readable error message")
