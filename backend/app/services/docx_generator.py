"""Service turning constrained markup into DOCX documents."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass

from bs4 import BeautifulSoup, ParserRejectedMarkup

from app.document_assembler import assemble_document
from app.document_models import DocumentModel
from app.docx_encoder import DocumentEncodingError, encode_document
from app.markup_walker import walk_markup

logger = logging.getLogger(__name__)


class MarkupParseError(RuntimeError):
    """Raised when the markup parser cannot build a tree from the input."""


GENERATION_ERRORS = (MarkupParseError, DocumentEncodingError)


@dataclass
class GeneratedDocument:
    """DOCX payload together with the model it was encoded from."""

    model: DocumentModel
    payload: bytes

    @property
    def base64(self) -> str:
        return base64.b64encode(self.payload).decode("ascii")


class DocxGenerator:
    """Parse markup, walk it into blocks and encode the result as DOCX."""

    def __init__(self, *, parser: str = "html.parser") -> None:
        self._parser = parser

    # ------------------------------------------------------------------
    def build_model(self, text: str) -> DocumentModel:
        """Return the document model for ``text`` without encoding it."""

        if not isinstance(text, str):
            raise TypeError("Markup text must be a string")
        try:
            soup = BeautifulSoup(text, self._parser)
        except ParserRejectedMarkup as exc:
            raise MarkupParseError("Markup could not be parsed") from exc
        blocks = walk_markup(soup.contents)
        return assemble_document(blocks)

    def generate(self, text: str) -> GeneratedDocument:
        model = self.build_model(text)
        payload = encode_document(model)
        logger.info("Generated DOCX with %d blocks (%d bytes)", len(model.blocks), len(payload))
        return GeneratedDocument(model=model, payload=payload)


__all__ = ["DocxGenerator", "GENERATION_ERRORS", "GeneratedDocument", "MarkupParseError"]
