"""Tests for block editing helpers on the codec data model."""

from __future__ import annotations

import pytest

from filterkit.core.codec import (
    AttributeLine,
    BlockType,
    InlineComment,
    RuleBlock,
    find_block,
    move_block,
    parse,
    sanitize_values,
)
from filterkit.core.exceptions import BlockEditError


def _block(*rendered: str) -> RuleBlock:
    text = "Show\n" + "".join(f"    {line}\n" for line in rendered)
    return parse(text)[0]


class TestAttributeLine:
    def test_empty_values_are_dropped(self):
        line = AttributeLine("Rarity", None, ["", "Rare", ""])
        assert line.values == ["Rare"]

    def test_render(self):
        assert AttributeLine("ItemLevel", ">=", ["65"]).render() == "ItemLevel >= 65"
        assert AttributeLine("Continue").render() == "Continue"

    def test_sanitize_values(self):
        assert sanitize_values(['"A",', ",", '"B"']) == ['"A"', '"B"']


class TestLookup:
    def test_lookup_is_case_insensitive(self):
        block = _block("ItemLevel >= 65")
        assert block.find_line("itemlevel") is block.lines[0]
        assert block.get_values("ITEMLEVEL") == ["65"]

    def test_missing_key(self):
        block = _block("ItemLevel >= 65")
        assert block.find_line("Rarity") is None
        assert block.get_values("Rarity") == []
        assert block.index_of("Rarity") == -1


class TestAddAndSet:
    def test_add_merge_key_extends_existing_entry(self):
        block = _block('BaseType "A"')
        merged = block.add_line(AttributeLine("BaseType", None, ['"B"']))
        assert merged is block.lines[0]
        assert block.lines[0].values == ['"A"', '"B"']

    def test_add_other_key_appends(self):
        block = _block("Rarity Rare")
        block.add_line(AttributeLine("Rarity", None, ["Unique"]))
        assert len(block.lines) == 2

    def test_set_replaces_in_place_keeping_key_spelling(self):
        block = _block("ItemLevel >= 65", "Rarity Rare")
        block.set_line("itemlevel", ["70,"], operator="<")
        assert block.lines[0].key == "ItemLevel"
        assert block.lines[0].render() == "ItemLevel < 70"
        assert block.lines[0].raw == "ItemLevel < 70"

    def test_set_adds_when_missing(self):
        block = _block("Rarity Rare")
        block.set_line("SetFontSize", ["40"])
        assert block.lines[-1].render() == "SetFontSize 40"


class TestRemove:
    def test_remove_every_match(self):
        block = _block("HasExplicitMod A", "Rarity Rare", "hasexplicitmod B")
        assert block.remove_line("HasExplicitMod") is True
        assert [line.key for line in block.lines] == ["Rarity"]

    def test_remove_missing_key(self):
        assert _block("Rarity Rare").remove_line("Quality") is False

    def test_comments_after_removed_line_shift_down(self):
        block = _block("A 1", "B 2", "C 3")
        block.inline_comments = [
            InlineComment(1, "# before B"),
            InlineComment(2, "# before C"),
            InlineComment(3, "# end"),
        ]
        block.remove_line("B")
        assert [c.before_index for c in block.inline_comments] == [1, 1, 2]


class TestMoveLine:
    def test_move(self):
        block = _block("A 1", "B 2", "C 3")
        block.move_line(2, 0)
        assert [line.key for line in block.lines] == ["C", "A", "B"]

    def test_out_of_range(self):
        block = _block("A 1")
        with pytest.raises(BlockEditError) as excinfo:
            block.move_line(0, 3)
        assert isinstance(excinfo.value, IndexError)
        assert excinfo.value.context["dest"] == 3


class TestDocumentHelpers:
    def test_find_block(self, counter_ids):
        blocks = parse("Show\nHide\n", new_id=counter_ids)
        assert find_block(blocks, "block-2") is blocks[1]
        assert find_block(blocks, "missing") is None

    def test_move_block(self):
        blocks = parse("Show\nHide\nMinimal\n")
        move_block(blocks, 0, 2)
        assert [b.type for b in blocks] == [BlockType.HIDE, BlockType.MINIMAL, BlockType.SHOW]

    def test_move_block_out_of_range(self):
        with pytest.raises(BlockEditError):
            move_block(parse("Show\n"), 0, 1)


class TestViews:
    def test_to_dict_uses_camel_case(self, counter_ids):
        data = parse("# Name\nShow\n    Rarity Rare\n", new_id=counter_ids)[0].to_dict()
        assert data["id"] == "block-1"
        assert data["type"] == "Show"
        assert data["rawHeader"] == "Name"
        assert data["startLine"] == 0
        assert data["lines"][0]["values"] == ["Rare"]

    def test_signature_ignores_identity(self):
        first = RuleBlock(id="a", type=BlockType.SHOW, lines=[AttributeLine("Rarity", None, ["Rare"])])
        second = RuleBlock(id="b", type=BlockType.SHOW, lines=[AttributeLine("Rarity", None, ["Rare"])])
        assert first.signature() == second.signature()
