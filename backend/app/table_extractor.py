"""Convert ``table`` markup into :class:`TableBlock` values."""
from __future__ import annotations

from typing import Callable, Collection, Iterable

from bs4 import Tag

from .document_models import ParagraphBlock, StyledRun, TableBlock, TableCell, TableRow

CellWalker = Callable[[Tag], list[StyledRun]]

_CELL_TAGS = {"td", "th"}


def _child_tags(node: Tag, names: Collection[str] | None = None) -> Iterable[Tag]:
    for child in node.children:
        if isinstance(child, Tag) and (names is None or child.name in names):
            yield child


def _row_candidates(table: Tag) -> Iterable[Tag]:
    tbody = next(iter(_child_tags(table, ("tbody",))), None)
    return _child_tags(tbody if tbody is not None else table)


def _build_cell(cell: Tag, walk_cell: CellWalker) -> TableCell:
    runs = walk_cell(cell)
    if not runs:
        return TableCell(blocks=())
    return TableCell(blocks=(ParagraphBlock(runs=tuple(runs), spaced=False),))


def extract_table(table: Tag, walk_cell: CellWalker) -> TableBlock | None:
    """Return the table block for ``table`` or ``None`` when it has no rows.

    ``walk_cell`` receives each ``td``/``th`` tag and returns the runs of
    its inline content.
    """

    rows: list[TableRow] = []
    for row in _row_candidates(table):
        if row.name != "tr":
            continue
        cells = [_build_cell(cell, walk_cell) for cell in _child_tags(row, _CELL_TAGS)]
        if cells:
            rows.append(TableRow(cells=tuple(cells)))
    if not rows:
        return None
    return TableBlock(rows=tuple(rows))


__all__ = ["CellWalker", "extract_table"]
