"""Serialize a :class:`DocumentModel` into DOCX bytes using python-docx."""
from __future__ import annotations

import logging
from io import BytesIO
from typing import Iterable

from docx import Document
from docx.document import Document as _Document
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.oxml import OxmlElement, parse_xml
from docx.oxml.ns import nsdecls, qn
from docx.shared import Pt, RGBColor, Twips
from docx.table import _Cell
from docx.text.paragraph import Paragraph

from .document_models import (
    DocumentModel,
    ListItemBlock,
    ListKind,
    NumberingDefinition,
    ParagraphBlock,
    ParagraphSpacing,
    StyledRun,
    TableBlock,
)

logger = logging.getLogger(__name__)

LIST_INDENT = 720  # twips per nesting level


class DocumentEncodingError(RuntimeError):
    """Raised when a document model cannot be written as DOCX."""


def _abstract_num_xml(abstract_id: int, definition: NumberingDefinition) -> str:
    levels = "".join(
        f'<w:lvl w:ilvl="{level.level}">'
        '<w:start w:val="1"/>'
        f'<w:numFmt w:val="{level.number_format}"/>'
        f'<w:lvlText w:val="{level.text}"/>'
        f'<w:lvlJc w:val="{level.alignment}"/>'
        f'<w:pPr><w:ind w:left="{level.indent_left}" w:hanging="{level.hanging}"/></w:pPr>'
        "</w:lvl>"
        for level in definition.levels
    )
    return (
        f'<w:abstractNum {nsdecls("w")} w:abstractNumId="{abstract_id}">'
        '<w:multiLevelType w:val="multilevel"/>'
        f"{levels}"
        "</w:abstractNum>"
    )


def _register_numbering(document: _Document, definition: NumberingDefinition) -> int:
    """Add ``definition`` to the numbering part and return its ``numId``."""

    numbering = document.part.numbering_part.element
    existing = [
        int(element.get(qn("w:abstractNumId")))
        for element in numbering.findall(qn("w:abstractNum"))
    ]
    abstract_id = max(existing, default=-1) + 1
    abstract = parse_xml(_abstract_num_xml(abstract_id, definition))

    # every w:abstractNum must precede the w:num elements
    first_num = numbering.find(qn("w:num"))
    if first_num is not None:
        first_num.addprevious(abstract)
    else:
        numbering.append(abstract)

    num = numbering.add_num(abstract_id)
    logger.debug("Registered numbering '%s' as numId %s", definition.reference, num.numId)
    return num.numId


def _style_run(run, styled: StyledRun) -> None:
    font = run.font
    font.name = styled.font
    font.size = Pt(styled.size / 2)
    font.color.rgb = RGBColor.from_string(styled.color)
    if styled.bold:
        font.bold = True


def _add_hyperlink(paragraph: Paragraph, styled: StyledRun) -> None:
    r_id = paragraph.part.relate_to(styled.link_url, RT.HYPERLINK, is_external=True)
    hyperlink = OxmlElement("w:hyperlink")
    hyperlink.set(qn("r:id"), r_id)

    run = paragraph.add_run(styled.text)
    _style_run(run, styled)
    run.font.underline = True
    # lxml moves the run out of the paragraph and into the hyperlink
    hyperlink.append(run._r)
    paragraph._p.append(hyperlink)


def _append_runs(paragraph: Paragraph, runs: Iterable[StyledRun]) -> None:
    for styled in runs:
        if styled.is_link:
            _add_hyperlink(paragraph, styled)
        else:
            _style_run(paragraph.add_run(styled.text), styled)


def _apply_spacing(paragraph: Paragraph, spacing: ParagraphSpacing) -> None:
    paragraph_format = paragraph.paragraph_format
    paragraph_format.space_before = Twips(spacing.before)
    paragraph_format.space_after = Twips(spacing.after)
    paragraph_format.line_spacing = spacing.line / 240


def _set_numbering(paragraph: Paragraph, num_id: int, level: int) -> None:
    num_pr = paragraph._p.get_or_add_pPr().get_or_add_numPr()
    num_pr.get_or_add_ilvl().val = level
    num_pr.get_or_add_numId().val = num_id


def _set_percent_width(properties, tag: str, percent: int) -> None:
    """Set a ``w:tblW``/``w:tcW`` style width in fiftieths of a percent."""

    width = properties.find(qn(tag))
    if width is None:
        width = OxmlElement(tag)
        properties.append(width)
    width.set(qn("w:type"), "pct")
    width.set(qn("w:w"), str(percent * 50))


class _DocxWriter:
    def __init__(self, model: DocumentModel) -> None:
        self.model = model
        self.document = Document()
        self.num_id = _register_numbering(self.document, model.numbering)

    def write(self) -> bytes:
        self._apply_margins()
        for block in self.model.blocks:
            if isinstance(block, ParagraphBlock):
                self._write_paragraph(block)
            elif isinstance(block, ListItemBlock):
                self._write_list_item(block)
            elif isinstance(block, TableBlock):
                self._write_table(block)
            else:
                raise DocumentEncodingError(f"Unsupported block: {type(block).__name__}")

        buffer = BytesIO()
        self.document.save(buffer)
        return buffer.getvalue()

    def _apply_margins(self) -> None:
        margins = self.model.margins
        for section in self.document.sections:
            section.top_margin = Twips(margins.top)
            section.bottom_margin = Twips(margins.bottom)
            section.left_margin = Twips(margins.left)
            section.right_margin = Twips(margins.right)

    def _write_paragraph(self, block: ParagraphBlock) -> None:
        paragraph = self.document.add_paragraph()
        _append_runs(paragraph, block.runs)
        if block.spaced:
            _apply_spacing(paragraph, self.model.spacing)

    def _write_list_item(self, block: ListItemBlock) -> None:
        paragraph = self.document.add_paragraph()
        _append_runs(paragraph, block.runs)
        if block.kind is ListKind.ORDERED:
            _set_numbering(paragraph, self.num_id, block.numbering_level)
        paragraph.paragraph_format.left_indent = Twips(LIST_INDENT * block.depth)
        _apply_spacing(paragraph, self.model.spacing)

    def _write_table(self, block: TableBlock) -> None:
        column_count = max(len(row.cells) for row in block.rows)
        table = self.document.add_table(rows=len(block.rows), cols=column_count)
        table.style = "Table Grid"
        _set_percent_width(table._tbl.tblPr, "w:tblW", block.width_percent)

        for row_index, row in enumerate(block.rows):
            for column_index, cell in enumerate(row.cells):
                docx_cell = table.cell(row_index, column_index)
                _set_percent_width(
                    docx_cell._tc.get_or_add_tcPr(), "w:tcW", cell.width_percent
                )
                self._write_cell(docx_cell, cell.blocks)

    def _write_cell(self, docx_cell: _Cell, blocks) -> None:
        for index, block in enumerate(blocks):
            if not isinstance(block, ParagraphBlock):
                raise DocumentEncodingError("Table cells only hold paragraphs")
            paragraph = docx_cell.paragraphs[0] if index == 0 else docx_cell.add_paragraph()
            _append_runs(paragraph, block.runs)


def encode_document(model: DocumentModel) -> bytes:
    """Return the DOCX bytes for ``model``."""

    try:
        payload = _DocxWriter(model).write()
    except DocumentEncodingError:
        raise
    except Exception as exc:
        raise DocumentEncodingError("Failed to encode document") from exc
    logger.debug("Encoded %d blocks into %d bytes", len(model.blocks), len(payload))
    return payload


__all__ = ["DocumentEncodingError", "LIST_INDENT", "encode_document"]
