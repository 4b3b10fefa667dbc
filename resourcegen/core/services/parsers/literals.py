"""
Restricted expression reader — literals and modifier chains, nothing else.

Understands:
    - string / number / boolean / null / undefined literals
    - template literals without ``${...}``
    - array and object literals (recursively)
    - identifier chains with member access and calls:
      ``z.string().optional().meta({...})``

Anything else (binary expressions, arrow functions, ``new``...) becomes an
``Opaque`` node holding the verbatim source text.  Nothing is executed.

Public API:
    ExpressionReader(tokens, text).read(index)  → (Node, next_index)
    evaluate(node)                              → plain Python value
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from resourcegen.core.services.parsers.lexer import (
    TK_EOF,
    TK_IDENT,
    TK_NUMBER,
    TK_PUNCT,
    TK_STRING,
    TK_TEMPLATE,
    Token,
)

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())
_OPERAND_PRECEDERS = frozenset({"(", "[", "{", ",", ":", "=", "=>", "?", "??", "&&", "||"})
_LITERAL_KEYWORDS: dict[str, Any] = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": None,
}


# ═══════════════════════════════════════════════════════════════════
#  Nodes
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Node:
    start: int        # source offsets, end exclusive
    end: int


@dataclass(frozen=True)
class Literal(Node):
    value: Any


@dataclass(frozen=True)
class ArrayLit(Node):
    elements: tuple[Node, ...]


@dataclass(frozen=True)
class Property:
    key: str
    value: Node


@dataclass(frozen=True)
class Spread:
    text: str


@dataclass(frozen=True)
class ObjectLit(Node):
    # Properties and spreads, in source order
    members: tuple[Property | Spread, ...]

    @property
    def properties(self) -> list[Property]:
        return [m for m in self.members if isinstance(m, Property)]

    @property
    def spreads(self) -> list[Spread]:
        return [m for m in self.members if isinstance(m, Spread)]


@dataclass(frozen=True)
class Member:
    name: str


@dataclass(frozen=True)
class Call:
    args: tuple[Node, ...]


@dataclass(frozen=True)
class Chain(Node):
    """``head`` followed by member accesses and calls, left to right."""

    head: str
    segments: tuple[Member | Call, ...] = field(default=())
    text: str = ""

    def calls(self) -> list[tuple[str, tuple[Node, ...]]]:
        """(callee name, args) for every call; the callee is the member just
        before the call, or the head for a direct call."""
        out: list[tuple[str, tuple[Node, ...]]] = []
        last = self.head
        for seg in self.segments:
            if isinstance(seg, Member):
                last = seg.name
            else:
                out.append((last, seg.args))
        return out

    def members(self) -> list[str]:
        return [s.name for s in self.segments if isinstance(s, Member)]


@dataclass(frozen=True)
class Opaque(Node):
    text: str


# ═══════════════════════════════════════════════════════════════════
#  Reader
# ═══════════════════════════════════════════════════════════════════


class ExpressionReader:
    """Recursive-descent reader over a token list from ``lexer.tokenize``."""

    def __init__(self, tokens: list[Token], text: str) -> None:
        self.tokens = tokens
        self.text = text

    def _tok(self, i: int) -> Token:
        return self.tokens[min(i, len(self.tokens) - 1)]

    def _at_terminator(self, i: int) -> bool:
        tok = self._tok(i)
        if tok.kind == TK_EOF:
            return True
        return tok.kind == TK_PUNCT and tok.value in (",", ";", ")", "]", "}")

    # ── Entry point ──────────────────────────────────────────────

    def read(self, i: int) -> tuple[Node, int]:
        """Read one expression starting at token *i*.

        Returns the node and the index of the first token after it.  The
        expression ends at a ``,``, ``;`` or unbalanced closer.
        """
        start = i
        node, j = self._read_primary(i)
        if node is not None:
            j = self._skip_as_const(j)
            if self._at_terminator(j):
                return node, j
        return self._read_opaque(start)

    def read_chain(self, i: int) -> tuple[Chain | None, int]:
        """Read an identifier chain at *i* with no terminator required after it.

        Statements in files without semicolons end at the next keyword, so
        a top-level ``const x = z.enum([...])`` is followed by ``export``
        rather than ``;``.
        """
        if self._tok(i).kind != TK_IDENT or self._tok(i).value in _LITERAL_KEYWORDS:
            return None, i
        node, j = self._read_chain(i)
        return (node if isinstance(node, Chain) else None), j

    # ── Primaries ────────────────────────────────────────────────

    def _read_primary(self, i: int) -> tuple[Node | None, int]:
        tok = self._tok(i)

        if tok.kind == TK_STRING:
            return Literal(tok.start, tok.end, tok.value), i + 1

        if tok.kind == TK_TEMPLATE and not tok.interpolated:
            return Literal(tok.start, tok.end, tok.value), i + 1

        if tok.kind == TK_NUMBER:
            return Literal(tok.start, tok.end, parse_number(tok.value)), i + 1

        if tok.is_punct("-") and self._tok(i + 1).kind == TK_NUMBER:
            num = self._tok(i + 1)
            return Literal(tok.start, num.end, -parse_number(num.value)), i + 2

        if tok.kind == TK_IDENT and tok.value in _LITERAL_KEYWORDS:
            nxt = self._tok(i + 1)
            if not (nxt.is_punct(".") or nxt.is_punct("(")):
                return Literal(tok.start, tok.end, _LITERAL_KEYWORDS[tok.value]), i + 1

        if tok.is_punct("["):
            return self._read_array(i)

        if tok.is_punct("{"):
            return self._read_object(i)

        if tok.kind == TK_IDENT:
            return self._read_chain(i)

        return None, i

    def _read_array(self, i: int) -> tuple[Node | None, int]:
        start = self._tok(i).start
        j = i + 1
        elements: list[Node] = []
        while not self._tok(j).is_punct("]"):
            if self._tok(j).kind == TK_EOF:
                return None, j
            if self._tok(j).is_punct(","):  # hole or trailing comma
                j += 1
                continue
            node, j = self.read(j)
            elements.append(node)
            if self._tok(j).is_punct(","):
                j += 1
            elif not self._tok(j).is_punct("]"):
                return None, j
        return ArrayLit(start, self._tok(j).end, tuple(elements)), j + 1

    def _read_object(self, i: int) -> tuple[Node | None, int]:
        start = self._tok(i).start
        j = i + 1
        members: list[Property | Spread] = []
        while not self._tok(j).is_punct("}"):
            tok = self._tok(j)
            if tok.kind == TK_EOF:
                return None, j

            if tok.is_punct("..."):
                node, j = self.read(j + 1)
                members.append(Spread(self.text[tok.start:node.end]))
            elif tok.kind in (TK_IDENT, TK_STRING, TK_NUMBER):
                key = tok.value
                nxt = self._tok(j + 1)
                if nxt.is_punct(":"):
                    node, j = self.read(j + 2)
                    members.append(Property(key, node))
                elif nxt.is_punct(",") or nxt.is_punct("}"):
                    # Shorthand { foo }: the value is the identifier itself
                    members.append(Property(key, Opaque(tok.start, tok.end, tok.value)))
                    j += 1
                else:
                    # Method, getter, or something stranger: skip it
                    j = self._skip_balanced(j + 1)
            else:
                # Computed key [expr]: value, or anything unexpected
                j = self._skip_balanced(j)

            if self._tok(j).is_punct(","):
                j += 1
            elif not self._tok(j).is_punct("}"):
                return None, j
        return ObjectLit(start, self._tok(j).end, tuple(members)), j + 1

    def _read_chain(self, i: int) -> tuple[Node | None, int]:
        head = self._tok(i)
        segments: list[Member | Call] = []
        j = i + 1
        end = head.end
        while True:
            tok = self._tok(j)
            if (tok.is_punct(".") or tok.is_punct("?.")) and self._tok(j + 1).kind == TK_IDENT:
                segments.append(Member(self._tok(j + 1).value))
                end = self._tok(j + 1).end
                j += 2
                continue
            if tok.is_punct("<"):
                after = self.skip_type_arguments(j)
                if after is not None:
                    j = after
                    continue
            if tok.is_punct("("):
                args, j = self.read_arguments(j)
                if args is None:
                    return None, j
                segments.append(Call(args))
                end = self._tok(j - 1).end
                continue
            break
        return Chain(head.start, end, head.value, tuple(segments), self.text[head.start:end]), j

    def read_arguments(self, i: int) -> tuple[tuple[Node, ...] | None, int]:
        """Read ``( arg, arg, ... )`` starting at the ``(`` token *i*."""
        j = i + 1
        args: list[Node] = []
        while not self._tok(j).is_punct(")"):
            if self._tok(j).kind == TK_EOF:
                return None, j
            node, j = self.read(j)
            args.append(node)
            if self._tok(j).is_punct(","):
                j += 1
            elif not self._tok(j).is_punct(")"):
                return None, j
        return tuple(args), j + 1

    def skip_type_arguments(self, i: int) -> int | None:
        """Skip ``<...>`` when it is followed by ``(``; None if it is not a
        type-argument list (e.g. a comparison)."""
        depth = 0
        j = i
        while True:
            tok = self._tok(j)
            if tok.kind == TK_EOF or tok.is_punct(";"):
                return None
            if tok.is_punct("<"):
                depth += 1
            elif tok.is_punct(">"):
                depth -= 1
                if depth == 0:
                    return j + 1 if self._tok(j + 1).is_punct("(") else None
            elif tok.is_punct("=>"):
                return None
            j += 1

    # ── Fallbacks ────────────────────────────────────────────────

    def _skip_as_const(self, j: int) -> int:
        if self._tok(j).is_ident("as") and self._tok(j + 1).is_ident("const"):
            return j + 2
        return j

    def _skip_balanced(self, i: int) -> int:
        """Advance to the next ``,``/``;``/unbalanced closer at depth 0.

        A ``<`` where an operand is expected (``<T,>(x: T) => x``) opens a
        type-parameter list; anywhere else it is a comparison.
        """
        stack: list[str] = []
        j = i
        while True:
            tok = self._tok(j)
            if tok.kind == TK_EOF:
                return j
            if tok.kind == TK_PUNCT:
                if tok.value == "<" and self._expects_operand(i, j):
                    stack.append(">")
                elif tok.value == ">" and stack and stack[-1] == ">":
                    stack.pop()
                elif tok.value in _OPENERS:
                    stack.append(_OPENERS[tok.value])
                elif tok.value in _CLOSERS:
                    if not stack:
                        return j
                    if stack[-1] == tok.value:
                        stack.pop()
                elif tok.value in (",", ";") and not stack:
                    return j
            j += 1

    def _expects_operand(self, start: int, j: int) -> bool:
        if j == start:
            return True
        prev = self._tok(j - 1)
        return prev.kind == TK_PUNCT and prev.value in _OPERAND_PRECEDERS

    def _read_opaque(self, i: int) -> tuple[Node, int]:
        j = self._skip_balanced(i)
        start = self._tok(i).start
        end = self._tok(j - 1).end if j > i else start
        return Opaque(start, end, self.text[start:end]), j


# ═══════════════════════════════════════════════════════════════════
#  Evaluation
# ═══════════════════════════════════════════════════════════════════


def parse_number(raw: str) -> int | float:
    """Numeric literal text → int or float ('1_000' → 1000, '0x1F' → 31)."""
    text = raw.replace("_", "")
    if text.endswith("n"):
        text = text[:-1]
    lowered = text.lower()
    if lowered.startswith(("0x", "0b", "0o")):
        return int(text, 0)
    if any(c in lowered for c in ".e"):
        return float(text)
    return int(text)


def evaluate(node: Node) -> Any:
    """Turn a node into plain data.

    Chains and opaque expressions come back as their source text; spreads
    inside objects are dropped.
    """
    if isinstance(node, Literal):
        return node.value
    if isinstance(node, ArrayLit):
        return [evaluate(e) for e in node.elements]
    if isinstance(node, ObjectLit):
        return {p.key: evaluate(p.value) for p in node.properties}
    if isinstance(node, Chain):
        return node.text
    if isinstance(node, Opaque):
        return node.text
    raise TypeError(f"Unknown node type: {type(node).__name__}")
