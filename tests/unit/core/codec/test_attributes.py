"""Tests for quote-aware attribute line parsing."""

from __future__ import annotations

from filterkit.core.codec.attributes import parse_attribute_line, tokenize


class TestTokenize:
    def test_quoted_tokens_keep_spaces_and_quotes(self):
        assert tokenize('Class "Stackable Currency" "Currency"') == [
            "Class",
            '"Stackable Currency"',
            '"Currency"',
        ]

    def test_repeated_spaces_produce_no_empty_tokens(self):
        assert tokenize("ItemLevel   >=   65") == ["ItemLevel", ">=", "65"]

    def test_unterminated_quote_absorbs_rest_of_line(self):
        assert tokenize('BaseType "Chaos Orb Divine') == ["BaseType", '"Chaos Orb Divine']

    def test_only_spaces_delimit(self):
        assert tokenize("SetTextColor\t255 0 0") == ["SetTextColor\t255", "0", "0"]


class TestParseAttributeLine:
    def test_operator_detection(self):
        line = parse_attribute_line("ItemLevel >= 65")
        assert line is not None
        assert line.key == "ItemLevel"
        assert line.operator == ">="
        assert line.values == ["65"]

    def test_implicit_operator(self):
        line = parse_attribute_line("ItemLevel 65")
        assert line is not None
        assert line.operator is None
        assert line.values == ["65"]

    def test_all_operators_recognised(self):
        for op in ("==", "=", "<", ">", "<=", ">="):
            line = parse_attribute_line(f"Quality {op} 5")
            assert line is not None and line.operator == op

    def test_unknown_operator_is_a_value(self):
        line = parse_attribute_line("Quality => 5")
        assert line is not None
        assert line.operator is None
        assert line.values == ["=>", "5"]

    def test_quote_aware_values(self):
        line = parse_attribute_line('    Class "Stackable Currency" "Currency"')
        assert line is not None
        assert line.values == ['"Stackable Currency"', '"Currency"']

    def test_commas_are_stripped_and_empties_dropped(self):
        line = parse_attribute_line('BaseType "Chaos Orb", "Divine Orb" , ,"Exalted Orb"')
        assert line is not None
        assert line.values == ['"Chaos Orb"', '"Divine Orb"', '"Exalted Orb"']

    def test_only_one_comma_is_stripped_per_side(self):
        line = parse_attribute_line("BaseType ,,A")
        assert line is not None
        assert line.values == [",A"]

    def test_key_only_line(self):
        line = parse_attribute_line("Continue")
        assert line is not None
        assert line.key == "Continue"
        assert line.operator is None
        assert line.values == []

    def test_blank_and_comment_yield_nothing(self):
        assert parse_attribute_line("   ") is None
        assert parse_attribute_line("# not an attribute") is None

    def test_raw_text_is_preserved(self):
        line = parse_attribute_line("Rarity = Rare")
        assert line is not None
        assert line.raw == "Rarity = Rare"

    def test_custom_operator_set(self):
        line = parse_attribute_line("Quality ~ 5", operators=("~",))
        assert line is not None
        assert line.operator == "~"
