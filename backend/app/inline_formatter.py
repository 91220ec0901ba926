"""Tokenize inline pseudo-markup into styled text runs."""
from __future__ import annotations

import re

from .document_models import HYPERLINK_COLOR, RED_COLOR, StyledRun

# positions where one of the three markers may start
_OPENER_PATTERN = re.compile(r"\*\*|\{red\}|\[")


def hyperlink_run(text: str, url: str, *, source: str | None = None) -> StyledRun:
    """Return a run rendered as an external hyperlink to ``url``."""

    return StyledRun(
        text=text,
        color=HYPERLINK_COLOR,
        link_url=url,
        source=text if source is None else source,
    )


class _InlineScanner:
    """Match markers at a given position without rescanning a line.

    Marker contents never span a newline and are matched lazily, so the
    closer of a marker is the first occurrence after at least one character.
    Once a closer is missing on a line, it is missing for every later opener
    on that line too; ``_missing`` remembers this per marker kind.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self._line_end = -1
        self._missing: dict[str, int] = {}

    def _enter_line(self, index: int) -> None:
        if index > self._line_end:
            newline = self.text.find("\n", index)
            self._line_end = len(self.text) if newline == -1 else newline

    def _find_closer(self, kind: str, closer: str, start: int) -> int:
        if self._missing.get(kind) == self._line_end:
            return -1
        index = self.text.find(closer, start, self._line_end)
        if index == -1:
            self._missing[kind] = self._line_end
        return index

    def match_at(self, start: int) -> tuple[StyledRun, int] | None:
        """Return the run starting at ``start`` and the index after it."""

        self._enter_line(start)
        text = self.text
        if text.startswith("**", start):
            close = self._find_closer("bold", "**", start + 3)
            if close == -1:
                return None
            end = close + 2
            return StyledRun(text=text[start + 2 : close], bold=True, source=text[start:end]), end
        if text.startswith("{red}", start):
            close = self._find_closer("red", "{/red}", start + 6)
            if close == -1:
                return None
            end = close + 6
            return StyledRun(text=text[start + 5 : close], color=RED_COLOR, source=text[start:end]), end
        separator = self._find_closer("link", "](", start + 2)
        if separator == -1:
            return None
        close = self._find_closer("link", ")", separator + 3)
        if close == -1:
            return None
        end = close + 1
        run = hyperlink_run(text[start + 1 : separator], text[separator + 2 : close], source=text[start:end])
        return run, end


def parse_inline_formatting(text: str) -> list[StyledRun]:
    """Split ``text`` into plain, bold, red and hyperlink runs.

    Markers recognised, first match wins at each position:

    * ``**bold**``
    * ``{red}warning{/red}``
    * ``[label](http://example.test)``

    Markers do not nest. Text outside markers becomes plain runs, so the
    ``source`` of the returned runs always covers ``text`` exactly once.
    The scan is linear in the length of ``text``.
    """

    runs: list[StyledRun] = []
    scanner = _InlineScanner(text)
    cursor = position = 0
    while True:
        opener = _OPENER_PATTERN.search(text, position)
        if opener is None:
            break
        start = opener.start()
        matched = scanner.match_at(start)
        if matched is None:
            position = start + 1
            continue
        run, end = matched
        if start > cursor:
            plain = text[cursor:start]
            runs.append(StyledRun(text=plain, source=plain))
        runs.append(run)
        cursor = position = end
    if cursor < len(text):
        tail = text[cursor:]
        runs.append(StyledRun(text=tail, source=tail))
    return runs


__all__ = ["hyperlink_run", "parse_inline_formatting"]
