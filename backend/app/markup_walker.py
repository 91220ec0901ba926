"""Recursive walk over parsed markup producing document blocks."""
from __future__ import annotations

import logging
from typing import Iterable

from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from .document_models import Block, ListItemBlock, ListKind, ParagraphBlock, StyledRun
from .inline_formatter import hyperlink_run, parse_inline_formatting
from .list_context import EMPTY_LIST_CONTEXT, ListContext
from .table_extractor import extract_table

logger = logging.getLogger(__name__)

BULLET = "• "

# raw-text elements whose content is never document text
SKIPPED_TAGS = frozenset({"script", "style", "template"})


class DocumentSink:
    """Top-level sink: loose runs become standalone paragraphs."""

    def __init__(self, blocks: list[Block]) -> None:
        self._blocks = blocks

    def add_text(self, runs: list[StyledRun]) -> None:
        self._blocks.append(ParagraphBlock(runs=tuple(runs)))

    def add_link(self, run: StyledRun) -> None:
        self._blocks.append(ParagraphBlock(runs=(run,), spaced=False))


class ParagraphSink:
    """Collects the runs of an enclosing paragraph, list item or table cell."""

    def __init__(self) -> None:
        self.runs: list[StyledRun] = []

    def add_text(self, runs: list[StyledRun]) -> None:
        self.runs.extend(runs)

    def add_link(self, run: StyledRun) -> None:
        self.runs.append(run)


Sink = DocumentSink | ParagraphSink


class MarkupWalker:
    """Turn a parsed markup tree into an ordered list of blocks.

    Block-level results (paragraphs, list items, tables) always land in the
    document block list, in the order their opening tags appear, even when
    they are nested inside another paragraph. Inline results go to the sink
    handed down the recursion.
    """

    def __init__(self) -> None:
        self.blocks: list[Block] = []

    # ------------------------------------------------------------------
    def walk(self, nodes: Iterable[PageElement]) -> list[Block]:
        self._walk(nodes, DocumentSink(self.blocks), EMPTY_LIST_CONTEXT)
        return self.blocks

    # ------------------------------------------------------------------
    def _walk(self, nodes: Iterable[PageElement], sink: Sink, context: ListContext) -> None:
        for node in nodes:
            if isinstance(node, Tag):
                self._visit_tag(node, sink, context)
            elif isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
                self._visit_text(str(node), sink)

    def _visit_tag(self, node: Tag, sink: Sink, context: ListContext) -> None:
        name = node.name
        if name in SKIPPED_TAGS:
            return
        if name == "p":
            self._visit_paragraph(node, context)
        elif name == "a" and node.get("href"):
            self._visit_link(node, sink)
        elif name == "table":
            self._visit_table(node, context)
        elif name in ("ol", "ul"):
            self._walk(node.children, sink, context.push(ListContext.kind_for_tag(name)))
        elif name == "li":
            self._visit_list_item(node, context)
        else:
            self._walk(node.children, sink, context)

    def _visit_text(self, text: str, sink: Sink) -> None:
        if not text.strip():
            return
        runs = parse_inline_formatting(text)
        if runs:
            sink.add_text(runs)

    def _visit_paragraph(self, node: Tag, context: ListContext) -> None:
        position = len(self.blocks)
        runs = self._collect_runs(node, context)
        if runs:
            self.blocks.insert(position, ParagraphBlock(runs=tuple(runs)))

    def _visit_link(self, node: Tag, sink: Sink) -> None:
        text = node.get_text()
        if not text:
            logger.debug("Skipping anchor without text: %s", node.get("href"))
            return
        sink.add_link(hyperlink_run(text, str(node["href"])))

    def _visit_table(self, node: Tag, context: ListContext) -> None:
        position = len(self.blocks)
        table = extract_table(node, lambda cell: self._collect_runs(cell, context))
        if table is not None:
            self.blocks.insert(position, table)

    def _visit_list_item(self, node: Tag, context: ListContext) -> None:
        position = len(self.blocks)
        runs = self._collect_runs(node, context)
        if not runs:
            return
        kind = context.kind
        if kind is ListKind.UNORDERED:
            runs.insert(0, StyledRun(text=BULLET, source=""))
        block = ListItemBlock(runs=tuple(runs), depth=context.depth, kind=kind)
        self.blocks.insert(position, block)

    def _collect_runs(self, node: Tag, context: ListContext) -> list[StyledRun]:
        sink = ParagraphSink()
        self._walk(node.children, sink, context)
        return sink.runs


def walk_markup(nodes: Iterable[PageElement]) -> list[Block]:
    """Return the blocks produced by walking ``nodes`` from the top level."""

    blocks = MarkupWalker().walk(nodes)
    logger.debug("Markup walk produced %d blocks", len(blocks))
    return blocks


__all__ = ["BULLET", "DocumentSink", "MarkupWalker", "ParagraphSink", "SKIPPED_TAGS", "walk_markup"]
