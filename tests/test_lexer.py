"""
Tests for the TypeScript token scanner and the restricted expression reader.
"""

import pytest

from resourcegen.core.services.parsers.lexer import (
    TK_EOF,
    TK_IDENT,
    TK_NUMBER,
    TK_REGEX,
    TK_STRING,
    TK_TEMPLATE,
    LexError,
    tokenize,
)
from resourcegen.core.services.parsers.literals import (
    Chain,
    ExpressionReader,
    ObjectLit,
    Opaque,
    evaluate,
    parse_number,
)


def _read(text: str):
    tokens = tokenize(text)
    node, _ = ExpressionReader(tokens, text).read(0)
    return node


class TestTokenize:
    def test_ends_with_eof(self):
        tokens = tokenize("a")
        assert [t.kind for t in tokens] == [TK_IDENT, TK_EOF]

    def test_comments_dropped(self):
        tokens = tokenize("// defineResource(\n/* defineResource( */ x")
        assert [t.value for t in tokens if t.kind == TK_IDENT] == ["x"]

    def test_string_escapes_decoded(self):
        tokens = tokenize(r"'it\'s' " + '"a\\nb"')
        assert [t.value for t in tokens[:2]] == ["it's", "a\nb"]
        assert all(t.kind == TK_STRING for t in tokens[:2])

    def test_identifier_inside_string_is_not_code(self):
        tokens = tokenize("'defineResource(' + x")
        assert tokens[0].kind == TK_STRING
        assert not any(t.is_ident("defineResource") for t in tokens)

    def test_template_with_substitution_flagged(self):
        plain, sub = tokenize("`abc` `a${b}c`")[:2]
        assert plain.kind == TK_TEMPLATE and not plain.interpolated
        assert sub.kind == TK_TEMPLATE and sub.interpolated
        assert sub.value == "ac"

    def test_regex_vs_division(self):
        tokens = tokenize("x = /ab+c/g; y = a / b")
        assert tokens[2].kind == TK_REGEX
        assert tokens[2].value == "/ab+c/g"
        assert not any(t.kind == TK_REGEX for t in tokens[4:])

    def test_multi_char_punctuation(self):
        values = [t.value for t in tokenize("...a => b?.c")[:-1]]
        assert values == ["...", "a", "=>", "b", "?.", "c"]

    def test_numbers(self):
        kinds = [t.kind for t in tokenize("1 2.5 0x1F 1_000")[:-1]]
        assert kinds == [TK_NUMBER] * 4

    def test_unterminated_string_raises(self):
        with pytest.raises(LexError) as exc:
            tokenize("x = 'abc")
        assert exc.value.offset == 4

    def test_unterminated_block_comment_raises(self):
        with pytest.raises(LexError):
            tokenize("/* never closed")


class TestParseNumber:
    @pytest.mark.parametrize("raw, expected", [
        ("42", 42),
        ("2.5", 2.5),
        ("0x1F", 31),
        ("1_000", 1000),
        ("1e3", 1000.0),
        ("10n", 10),
    ])
    def test_values(self, raw, expected):
        assert parse_number(raw) == expected


class TestExpressionReader:
    def test_object_literal(self):
        node = _read("{ name: 'order', limit: -5, ok: true, none: null, tags: ['a', 'b',], }")
        assert isinstance(node, ObjectLit)
        assert evaluate(node) == {
            "name": "order",
            "limit": -5,
            "ok": True,
            "none": None,
            "tags": ["a", "b"],
        }

    def test_quoted_and_numeric_keys(self):
        assert evaluate(_read("{ 'a-b': 1, 2: 'two' }")) == {"a-b": 1, "2": "two"}

    def test_nested_objects(self):
        value = evaluate(_read("{ table: { columns: ['id'], pageSize: 25 } }"))
        assert value == {"table": {"columns": ["id"], "pageSize": 25}}

    def test_chain_segments(self):
        node = _read("z.string().min(1).meta({ label: 'X' })")
        assert isinstance(node, Chain)
        assert node.head == "z"
        assert node.members() == ["string", "min", "meta"]
        assert [c for c, _ in node.calls()] == ["string", "min", "meta"]
        assert evaluate(node) == "z.string().min(1).meta({ label: 'X' })"

    def test_shorthand_property_is_source_text(self):
        assert evaluate(_read("{ columns }")) == {"columns": "columns"}

    def test_spread_dropped_on_evaluate(self):
        node = _read("{ ...base, name: 'x' }")
        assert isinstance(node, ObjectLit)
        assert [s.text for s in node.spreads] == ["...base"]
        assert evaluate(node) == {"name": "x"}

    def test_binary_expression_is_opaque(self):
        node = _read("a + b")
        assert isinstance(node, Opaque)
        assert node.text == "a + b"

    def test_arrow_function_value_is_opaque_text(self):
        value = evaluate(_read("{ format: (v) => v * 2, name: 'n' }"))
        assert value == {"format": "(v) => v * 2", "name": "n"}

    def test_as_const_skipped(self):
        assert evaluate(_read("['a', 'b'] as const")) == ["a", "b"]

    def test_type_arguments_skipped(self):
        node = _read("z.custom<Date>()")
        assert isinstance(node, Chain)
        assert node.members() == ["custom"]

    def test_methods_skipped(self):
        assert evaluate(_read("{ get() { return 1 }, name: 'n' }")) == {"name": "n"}

    def test_generic_arrow_value_kept_whole(self):
        value = evaluate(_read("{ render: <T,>(x: T) => x, name: 'n' }"))
        assert value == {"render": "<T,>(x: T) => x", "name": "n"}

    def test_comparison_is_not_a_type_list(self):
        value = evaluate(_read("{ flag: a < b, name: 'n' }"))
        assert value == {"flag": "a < b", "name": "n"}


class TestReadChain:
    def test_statement_without_semicolon(self):
        text = "z.enum(['a', 'b'])\nexport const next = 1"
        tokens = tokenize(text)
        node, j = ExpressionReader(tokens, text).read_chain(0)
        assert isinstance(node, Chain)
        assert node.text == "z.enum(['a', 'b'])"
        assert tokens[j].value == "export"

    def test_not_an_identifier(self):
        text = "['a']"
        node, j = ExpressionReader(tokenize(text), text).read_chain(0)
        assert node is None
        assert j == 0
