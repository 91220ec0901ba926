"""Common dependency functions for API routes."""

from functools import lru_cache
from typing import Generator

from app.core.config import get_settings, settings
from app.services.docx_generator import DocxGenerator


@lru_cache
def get_docx_generator() -> DocxGenerator:
    return DocxGenerator(parser=settings.markup_parser)


def get_app_settings() -> Generator:
    yield get_settings()
