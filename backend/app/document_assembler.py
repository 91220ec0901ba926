"""Wrap walked blocks with the fixed page and numbering configuration."""
from __future__ import annotations

from typing import Iterable

from .document_models import (
    Block,
    DocumentModel,
    NumberingDefinition,
    NumberingLevel,
    PageMargins,
    ParagraphSpacing,
)

NUMBERING_REFERENCE = "numbered-list"

NUMBERED_LIST = NumberingDefinition(
    reference=NUMBERING_REFERENCE,
    levels=(
        NumberingLevel(level=0, text="%1.", indent_left=0, hanging=360),
        NumberingLevel(level=1, text="%2.", indent_left=720, hanging=360),
        NumberingLevel(level=2, text="%3.", indent_left=1440, hanging=360),
    ),
)

PAGE_MARGINS = PageMargins(top=640, bottom=640, left=640, right=640)

BODY_SPACING = ParagraphSpacing(before=0, after=100, line=276)


def assemble_document(blocks: Iterable[Block]) -> DocumentModel:
    return DocumentModel(
        blocks=tuple(blocks),
        numbering=NUMBERED_LIST,
        margins=PAGE_MARGINS,
        spacing=BODY_SPACING,
    )


__all__ = [
    "BODY_SPACING",
    "NUMBERED_LIST",
    "NUMBERING_REFERENCE",
    "PAGE_MARGINS",
    "assemble_document",
]
