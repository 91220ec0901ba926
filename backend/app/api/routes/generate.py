"""Endpoint converting markup into a DOCX document."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from app.api.deps import get_app_settings, get_docx_generator
from app.core.config import Settings
from app.schemas.docx import (
    DOCX_MEDIA_TYPE,
    ErrorResponse,
    GenerateDocxRequest,
    GenerateDocxResponse,
)
from app.services.docx_generator import GENERATION_ERRORS, DocxGenerator

logger = logging.getLogger(__name__)

GENERATION_FAILED = "Failed to generate docx."

router = APIRouter(tags=["docx"])


@router.post(
    "/generate-docx",
    response_model=GenerateDocxResponse,
    responses={
        200: {"content": {DOCX_MEDIA_TYPE: {}}},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def generate_docx(
    payload: GenerateDocxRequest,
    download: str | None = Query(default=None, description="Pass 'true' to receive raw DOCX bytes"),
    generator: DocxGenerator = Depends(get_docx_generator),
    settings: Settings = Depends(get_app_settings),
):
    """Convert the posted markup into a DOCX file."""

    try:
        document = generator.generate(payload.text)
    except GENERATION_ERRORS as exc:
        logger.error("DOCX generation failed: %s", exc)
        raise HTTPException(status_code=500, detail=GENERATION_FAILED) from exc
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.exception("Unexpected error while generating DOCX")
        raise HTTPException(status_code=500, detail=GENERATION_FAILED) from exc

    if download == "true":
        return Response(
            content=document.payload,
            media_type=DOCX_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{settings.download_filename}"'},
        )
    return GenerateDocxResponse(file=document.base64)
