"""
TypeScript token scanner — just enough to read schema declarations.

Produces a flat token list with source offsets.  Comments and whitespace
are dropped; string, template and regex literals are kept whole so that
nothing inside them is ever mistaken for code.  This is not a full
TypeScript lexer: JSX, decorators and ASI subtleties are out of scope.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Token kinds
TK_IDENT = "IDENT"
TK_STRING = "STRING"
TK_TEMPLATE = "TEMPLATE"
TK_NUMBER = "NUMBER"
TK_REGEX = "REGEX"
TK_PUNCT = "PUNCT"
TK_EOF = "EOF"

_DIGITS = "0123456789"
_re_ident = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_re_number = re.compile(
    r"(?:0[xX][0-9a-fA-F_]+|0[bB][01_]+|0[oO][0-7_]+"
    r"|(?:\d[\d_]*(?:\.[\d_]*)?|\.\d[\d_]*)(?:[eE][+-]?\d+)?)n?"
)

# Longest first
_MULTI_PUNCT = (
    "...", "===", "!==", "**=", "??=", "=>", "?.", "??", "==", "!=",
    "<=", ">=", "&&", "||", "++", "--", "+=", "-=", "*=", "/=", "**",
)

# After these a "/" starts a division, anywhere else a regex literal
_DIVISION_PRECEDERS = frozenset({")", "]", "}"})
_KEYWORDS_BEFORE_EXPR = frozenset({"return", "typeof", "case", "in", "of", "new", "delete", "void"})


class LexError(ValueError):
    """Unterminated literal or comment."""

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(f"{message} at offset {offset}")
        self.offset = offset


@dataclass(frozen=True)
class Token:
    kind: str
    value: str        # identifier/punct text, or the decoded literal value
    start: int
    end: int          # exclusive
    # TEMPLATE only: True when the literal contains ${...}
    interpolated: bool = False

    def is_punct(self, value: str) -> bool:
        return self.kind == TK_PUNCT and self.value == value

    def is_ident(self, value: str | None = None) -> bool:
        return self.kind == TK_IDENT and (value is None or self.value == value)


_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v",
    "0": "\0", "\\": "\\", "'": "'", '"': '"', "`": "`", "$": "$",
}


def _decode_escape(text: str, i: int) -> tuple[str, int]:
    """Decode the escape sequence starting after the backslash at text[i-1]."""
    ch = text[i]
    if ch == "u":
        if text.startswith("{", i + 1):
            close = text.index("}", i + 2)
            return chr(int(text[i + 2:close], 16)), close + 1
        return chr(int(text[i + 1:i + 5], 16)), i + 5
    if ch == "x":
        return chr(int(text[i + 1:i + 3], 16)), i + 3
    if ch == "\n":  # line continuation
        return "", i + 1
    return _ESCAPES.get(ch, ch), i + 1


def _scan_quoted(text: str, start: int) -> tuple[str, int]:
    quote = text[start]
    i = start + 1
    out: list[str] = []
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == quote:
            return "".join(out), i + 1
        if ch == "\\":
            try:
                decoded, i = _decode_escape(text, i + 1)
            except (ValueError, IndexError) as e:
                raise LexError("Bad escape sequence", i) from e
            out.append(decoded)
            continue
        if ch == "\n":
            break
        out.append(ch)
        i += 1
    raise LexError("Unterminated string literal", start)


def _scan_template(text: str, start: int) -> tuple[str, int, bool]:
    """Scan a template literal.  Substitutions are skipped, not evaluated."""
    i = start + 1
    out: list[str] = []
    interpolated = False
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "`":
            return "".join(out), i + 1, interpolated
        if ch == "\\":
            try:
                decoded, i = _decode_escape(text, i + 1)
            except (ValueError, IndexError) as e:
                raise LexError("Bad escape sequence", i) from e
            out.append(decoded)
            continue
        if ch == "$" and text.startswith("{", i + 1):
            interpolated = True
            i = _skip_substitution(text, i + 2)
            continue
        out.append(ch)
        i += 1
    raise LexError("Unterminated template literal", start)


def _skip_substitution(text: str, i: int) -> int:
    """Return the offset just past the ``}`` closing a ``${`` substitution."""
    depth = 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in ("'", '"'):
            _, i = _scan_quoted(text, i)
            continue
        if ch == "`":
            _, i, _ = _scan_template(text, i)
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    raise LexError("Unterminated template substitution", i)


def _scan_regex(text: str, start: int) -> int:
    i = start + 1
    in_class = False
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "\n":
            break
        if ch == "[":
            in_class = True
        elif ch == "]":
            in_class = False
        elif ch == "/" and not in_class:
            i += 1
            while i < n and (text[i].isalnum() or text[i] == "_"):
                i += 1  # flags
            return i
        i += 1
    raise LexError("Unterminated regex literal", start)


def _regex_allowed(prev: Token | None) -> bool:
    if prev is None:
        return True
    if prev.kind in (TK_NUMBER, TK_STRING, TK_TEMPLATE, TK_REGEX):
        return False
    if prev.kind == TK_IDENT:
        return prev.value in _KEYWORDS_BEFORE_EXPR
    return prev.value not in _DIVISION_PRECEDERS


def tokenize(text: str) -> list[Token]:
    """Split *text* into tokens, ending with a single EOF token.

    Raises:
        LexError: On an unterminated string, template, regex or block comment.
    """
    tokens: list[Token] = []
    i = 0
    n = len(text)
    prev: Token | None = None

    while i < n:
        ch = text[i]

        if ch.isspace():
            i += 1
            continue

        if text.startswith("//", i):
            nl = text.find("\n", i)
            i = n if nl == -1 else nl + 1
            continue

        if text.startswith("/*", i):
            close = text.find("*/", i + 2)
            if close == -1:
                raise LexError("Unterminated block comment", i)
            i = close + 2
            continue

        if ch in ("'", '"'):
            value, end = _scan_quoted(text, i)
            tok = Token(TK_STRING, value, i, end)
        elif ch == "`":
            value, end, interpolated = _scan_template(text, i)
            tok = Token(TK_TEMPLATE, value, i, end, interpolated)
        elif ch == "/" and _regex_allowed(prev):
            end = _scan_regex(text, i)
            tok = Token(TK_REGEX, text[i:end], i, end)
        elif ch in _DIGITS or (ch == "." and i + 1 < n and text[i + 1] in _DIGITS):
            m = _re_number.match(text, i)
            assert m is not None
            tok = Token(TK_NUMBER, m.group(0), i, m.end())
        elif (m := _re_ident.match(text, i)) is not None:
            tok = Token(TK_IDENT, m.group(0), i, m.end())
        else:
            op = next((p for p in _MULTI_PUNCT if text.startswith(p, i)), ch)
            tok = Token(TK_PUNCT, op, i, i + len(op))

        tokens.append(tok)
        prev = tok
        i = tok.end

    tokens.append(Token(TK_EOF, "", n, n))
    return tokens
