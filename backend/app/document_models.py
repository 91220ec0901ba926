"""Common document model definitions shared by the walker, assembler and encoder."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

DEFAULT_FONT = "Calibri"
DEFAULT_FONT_SIZE = 19  # half-points
DEFAULT_COLOR = "000000"
RED_COLOR = "FF0000"
HYPERLINK_COLOR = "0563C1"


class ListKind(str, Enum):
    """Kind of the list container enclosing a list item."""

    ORDERED = "ol"
    UNORDERED = "ul"


@dataclass(frozen=True, slots=True)
class StyledRun:
    """Contiguous span of inline text sharing one formatting treatment.

    Parameters
    ----------
    text:
        Visible text of the run, markers stripped.
    bold:
        Whether the run is rendered in bold.
    color:
        Hex RGB colour without the leading ``#``.
    link_url:
        Target of an external hyperlink, ``None`` for ordinary runs.
    source:
        Slice of the original markup text the run was produced from. Joining
        the sources of consecutive runs reproduces the input string.
    """

    text: str
    bold: bool = False
    color: str = DEFAULT_COLOR
    link_url: str | None = None
    font: str = DEFAULT_FONT
    size: int = DEFAULT_FONT_SIZE
    source: str = ""

    @property
    def is_link(self) -> bool:
        return self.link_url is not None


@dataclass(frozen=True, slots=True)
class ParagraphBlock:
    """A body paragraph. ``spaced`` paragraphs get the fixed body spacing."""

    runs: tuple[StyledRun, ...]
    spaced: bool = True


@dataclass(frozen=True, slots=True)
class ListItemBlock:
    runs: tuple[StyledRun, ...]
    depth: int
    kind: ListKind

    @property
    def numbering_level(self) -> int | None:
        if self.kind is not ListKind.ORDERED:
            return None
        return min(self.depth, MAX_NUMBERING_LEVEL)


@dataclass(frozen=True, slots=True)
class TableCell:
    blocks: tuple["Block", ...]
    width_percent: int = 50


@dataclass(frozen=True, slots=True)
class TableRow:
    cells: tuple[TableCell, ...]


@dataclass(frozen=True, slots=True)
class TableBlock:
    rows: tuple[TableRow, ...]
    width_percent: int = 100


Block = Union[ParagraphBlock, ListItemBlock, TableBlock]

MAX_NUMBERING_LEVEL = 2


@dataclass(frozen=True, slots=True)
class NumberingLevel:
    """One level of a decimal multi-level numbering definition (twips)."""

    level: int
    text: str
    indent_left: int
    hanging: int
    number_format: str = "decimal"
    alignment: str = "left"


@dataclass(frozen=True, slots=True)
class NumberingDefinition:
    reference: str
    levels: tuple[NumberingLevel, ...]


@dataclass(frozen=True, slots=True)
class PageMargins:
    top: int
    bottom: int
    left: int
    right: int


@dataclass(frozen=True, slots=True)
class ParagraphSpacing:
    """Spacing applied to body paragraphs: twips before/after, line in 240ths."""

    before: int
    after: int
    line: int


@dataclass(frozen=True, slots=True)
class DocumentModel:
    """Encoder-ready representation of a whole document."""

    blocks: tuple[Block, ...]
    numbering: NumberingDefinition
    margins: PageMargins
    spacing: ParagraphSpacing


__all__ = [
    "Block",
    "DEFAULT_COLOR",
    "DEFAULT_FONT",
    "DEFAULT_FONT_SIZE",
    "DocumentModel",
    "HYPERLINK_COLOR",
    "ListItemBlock",
    "ListKind",
    "MAX_NUMBERING_LEVEL",
    "NumberingDefinition",
    "NumberingLevel",
    "PageMargins",
    "ParagraphBlock",
    "ParagraphSpacing",
    "RED_COLOR",
    "StyledRun",
    "TableBlock",
    "TableCell",
    "TableRow",
]
