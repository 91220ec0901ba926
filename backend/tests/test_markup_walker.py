"""Tests for the recursive markup walk."""

from __future__ import annotations

from bs4 import BeautifulSoup

from app.document_models import ListItemBlock, ListKind, ParagraphBlock, TableBlock
from app.list_context import EMPTY_LIST_CONTEXT, ListContext
from app.markup_walker import BULLET, walk_markup


def _walk(markup: str):
    return walk_markup(BeautifulSoup(markup, "html.parser").contents)


def _texts(block) -> list[str]:
    return [run.text for run in block.runs]


def test_list_context_depth_and_kind() -> None:
    assert EMPTY_LIST_CONTEXT.depth == 0
    assert EMPTY_LIST_CONTEXT.kind is ListKind.UNORDERED

    nested = EMPTY_LIST_CONTEXT.push(ListKind.ORDERED).push(ListKind.UNORDERED)
    assert nested.depth == 1
    assert nested.kind is ListKind.UNORDERED
    assert EMPTY_LIST_CONTEXT.markers == ()
    assert ListContext.kind_for_tag("ol") is ListKind.ORDERED
    assert ListContext.kind_for_tag("div") is None


def test_top_level_text_becomes_paragraph() -> None:
    blocks = _walk("**bold** and {red}warn{/red}")

    assert len(blocks) == 1
    assert isinstance(blocks[0], ParagraphBlock)
    assert _texts(blocks[0]) == ["bold", " and ", "warn"]


def test_paragraph_with_inline_link_marker() -> None:
    blocks = _walk("<p>See [docs](http://x.test)</p>")

    assert len(blocks) == 1
    links = [run for run in blocks[0].runs if run.is_link]
    assert len(links) == 1
    assert links[0].text == "docs"
    assert links[0].link_url == "http://x.test"


def test_anchor_inside_paragraph_flattens_its_text() -> None:
    blocks = _walk('<p>Go <a href="http://y.test"><b>here</b> now</a></p>')

    assert len(blocks) == 1
    assert _texts(blocks[0]) == ["Go ", "here now"]
    assert blocks[0].runs[1].link_url == "http://y.test"


def test_top_level_anchor_gets_its_own_paragraph() -> None:
    blocks = _walk('<a href="http://z.test">z</a>')

    assert len(blocks) == 1
    assert isinstance(blocks[0], ParagraphBlock)
    assert blocks[0].spaced is False
    assert blocks[0].runs[0].link_url == "http://z.test"


def test_anchor_without_href_is_transparent() -> None:
    blocks = _walk("<p><a name='top'>**plain**</a></p>")

    assert len(blocks) == 1
    assert blocks[0].runs[0].text == "plain"
    assert blocks[0].runs[0].bold is True
    assert blocks[0].runs[0].link_url is None


def test_unordered_items_get_bullet_prefix() -> None:
    blocks = _walk("<ul><li>a</li><li>b</li></ul>")

    assert len(blocks) == 2
    for block, text in zip(blocks, ["a", "b"]):
        assert isinstance(block, ListItemBlock)
        assert block.kind is ListKind.UNORDERED
        assert block.depth == 0
        assert block.numbering_level is None
        assert _texts(block) == [BULLET, text]


def test_nested_ordered_items_keep_document_order() -> None:
    blocks = _walk("<ol><li>x<ol><li>y</li></ol></li></ol>")

    assert [_texts(block) for block in blocks] == [["x"], ["y"]]
    assert [block.depth for block in blocks] == [0, 1]
    assert [block.numbering_level for block in blocks] == [0, 1]
    assert all(block.kind is ListKind.ORDERED for block in blocks)


def test_depth_follows_number_of_enclosing_lists() -> None:
    blocks = _walk("<ol><li>1<ol><li>2<ul><li>3<ol><li>4</li></ol></li></ul></li></ol></li></ol>")

    assert [block.depth for block in blocks] == [0, 1, 2, 3]
    assert [block.kind for block in blocks] == [
        ListKind.ORDERED,
        ListKind.ORDERED,
        ListKind.UNORDERED,
        ListKind.ORDERED,
    ]
    # only three numbering levels exist, deeper items reuse the last one
    assert blocks[3].numbering_level == 2


def test_list_item_without_list_is_unordered_at_depth_zero() -> None:
    blocks = _walk("<li>lonely</li>")

    assert len(blocks) == 1
    assert blocks[0].kind is ListKind.UNORDERED
    assert blocks[0].depth == 0
    assert _texts(blocks[0]) == [BULLET, "lonely"]


def test_whitespace_only_markup_emits_nothing() -> None:
    assert _walk("   \n\t ") == []
    assert _walk("<p>  </p>\n<ul>\n  <li> </li>\n</ul><div>\n</div>") == []
    assert _walk("") == []


def test_unknown_tags_are_transparent() -> None:
    blocks = _walk("<div><section><span>**b**</span></section></div><p>a <em>b</em></p>")

    assert len(blocks) == 2
    assert _texts(blocks[0]) == ["b"]
    assert blocks[0].runs[0].bold is True
    assert _texts(blocks[1]) == ["a ", "b"]


def test_text_and_paragraphs_keep_source_order() -> None:
    blocks = _walk("intro<p>body</p>outro")

    assert [_texts(block) for block in blocks] == [["intro"], ["body"], ["outro"]]


def test_paragraph_precedes_blocks_nested_inside_it() -> None:
    blocks = _walk("<p>lead<ul><li>item</li></ul></p>")

    assert isinstance(blocks[0], ParagraphBlock)
    assert _texts(blocks[0]) == ["lead"]
    assert isinstance(blocks[1], ListItemBlock)


def test_comments_are_ignored_and_entities_decoded() -> None:
    blocks = _walk("<!-- hidden --><p>a &amp; b</p>")

    assert len(blocks) == 1
    assert _texts(blocks[0]) == ["a & b"]


def test_table_is_emitted_in_place() -> None:
    blocks = _walk("<p>before</p><table><tr><td>1</td><td>2</td></tr></table><p>after</p>")

    assert [type(block) for block in blocks] == [ParagraphBlock, TableBlock, ParagraphBlock]


def test_script_style_and_template_content_is_dropped() -> None:
    blocks = _walk(
        "<style>p { color: red }</style><script>var a = 1;</script>"
        "<template><p>hidden</p></template><p>x</p>"
    )

    assert [_texts(block) for block in blocks] == [["x"]]


def test_style_inside_paragraph_is_dropped() -> None:
    blocks = _walk("<p>a<style>b { }</style>c</p>")

    assert [_texts(block) for block in blocks] == [["a", "c"]]
