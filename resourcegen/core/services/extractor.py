"""
Descriptor extractor — read a resource declaration without running it.

Finds the single ``defineResource(config, fields)`` call in a schema file,
reads both arguments with the restricted expression reader, and builds
a ``ResourceDescriptor``.  Pure function of the source text.

Public API:
    extract(source, origin=...)   → ResourceDescriptor
    extract_file(path)            → ResourceDescriptor
    discover_schema_files(root)   → sorted schema paths, base file excluded
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from resourcegen.core.errors import DescriptorNotFound, InvalidDescriptor
from resourcegen.core.models.config import CodegenConfig
from resourcegen.core.models.descriptor import (
    RECOGNIZED_FIELD_META_KEYS,
    BaseKind,
    FieldDescriptor,
    ResourceDescriptor,
)
from resourcegen.core.services.parsers.lexer import TK_IDENT, LexError, Token, tokenize
from resourcegen.core.services.parsers.literals import (
    ArrayLit,
    Chain,
    ExpressionReader,
    Literal,
    Node,
    ObjectLit,
    evaluate,
)

logger = logging.getLogger(__name__)

DEFAULT_FACTORY = "defineResource"

# Namespace object the schema constructors hang off (``z.string()``)
SCHEMA_NAMESPACE = "z"

# Constructor name → base kind.  First recognised member after the
# namespace wins; this is a naming heuristic, not type inference.
_KIND_BY_CONSTRUCTOR: dict[str, BaseKind] = {
    "string": "string",
    "number": "number",
    "bigint": "number",
    "boolean": "boolean",
    "enum": "enum",
    "nativeEnum": "enum",
    "array": "array",
    "object": "object",
    "record": "object",
}

# Members between the namespace and the constructor that do not name a type
_NAMESPACE_PREFIXES = frozenset({"coerce"})

_OPTIONAL_MODIFIERS = frozenset({"optional", "nullable", "nullish"})
_META_CALL = "meta"
_DECLARATION_KEYWORDS = frozenset({"const", "let", "var"})


# ═══════════════════════════════════════════════════════════════════
#  Entry points
# ═══════════════════════════════════════════════════════════════════


def extract_file(path: Path, *, factory: str = DEFAULT_FACTORY) -> ResourceDescriptor:
    """Read *path* and extract its descriptor.

    Raises:
        DescriptorNotFound: The file does not exist.
        InvalidDescriptor:  The file has no usable resource declaration.
    """
    if not path.is_file():
        raise DescriptorNotFound(str(path))
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidDescriptor(f"Cannot read {path}: {e}") from e
    return extract(source, origin=str(path), factory=factory)


def extract(
    source: str,
    *,
    origin: str = "<source>",
    factory: str = DEFAULT_FACTORY,
) -> ResourceDescriptor:
    """Extract the resource descriptor declared in *source*.

    Raises:
        InvalidDescriptor: Zero or several factory calls, wrong argument
            shape, or a missing/empty ``name``.
    """
    try:
        tokens = tokenize(source)
    except LexError as e:
        raise InvalidDescriptor(f"{origin}: cannot tokenize: {e}") from e

    reader = ExpressionReader(tokens, source)
    sites = _find_factory_calls(tokens, factory)

    if not sites:
        raise InvalidDescriptor(f"No {factory}() call found in {origin}")
    if len(sites) > 1:
        raise InvalidDescriptor(
            f"Expected exactly one {factory}() call in {origin}, found {len(sites)}"
        )

    call_index = sites[0]
    args, _ = reader.read_arguments(_open_paren_index(reader, tokens, call_index))
    if args is None:
        raise InvalidDescriptor(f"Unbalanced {factory}() call in {origin}")
    if len(args) != 2:
        raise InvalidDescriptor(
            f"{factory}() requires config and fields arguments in {origin}, got {len(args)}"
        )

    config_node, fields_node = args
    if not isinstance(config_node, ObjectLit):
        raise InvalidDescriptor(f"{factory}() config must be an object literal in {origin}")
    if not isinstance(fields_node, ObjectLit):
        raise InvalidDescriptor(f"{factory}() fields must be an object literal in {origin}")

    config = evaluate(config_node)
    name = config.get("name")
    if not isinstance(name, str) or not name.strip():
        raise InvalidDescriptor(f"Resource config must have a non-empty string name in {origin}")

    plural = config.get("pluralName")
    plural_name = plural if isinstance(plural, str) and plural else f"{name}s"

    constants = _collect_constants(tokens, reader)
    fields = [
        _read_field(prop.key, prop.value, constants)
        for prop in fields_node.properties
    ]
    for spread in fields_node.spreads:
        logger.debug("%s: ignoring spread %s in field map", origin, spread.text)

    descriptor = ResourceDescriptor(
        name=name,
        plural_name=plural_name,
        var_name=_assigned_name(tokens, call_index) or "",
        config=config,
        fields=fields,
        source_path=origin,
    )

    for key in descriptor.unrecognized_config_keys:
        logger.debug("%s: config key '%s' kept but not interpreted", origin, key)

    logger.info(
        "Extracted %s (%s) from %s: %d field(s)",
        descriptor.name, descriptor.plural_name, origin, len(descriptor.fields),
    )
    return descriptor


def discover_schema_files(project_root: Path, config: CodegenConfig | None = None) -> list[Path]:
    """Every resource declaration under the schemas dir, base file excluded."""
    cfg = config or CodegenConfig()
    schemas_dir = project_root / cfg.schemas_dir
    if not schemas_dir.is_dir():
        return []
    return sorted(
        p for p in schemas_dir.glob(f"*{cfg.schema_suffix}")
        if p.is_file() and p.name != cfg.base_schema
    )


def resource_name_for(path: Path, config: CodegenConfig | None = None) -> str:
    """'src/schemas/order.schema.ts' → 'order'."""
    suffix = (config or CodegenConfig()).schema_suffix
    name = path.name
    return name[: -len(suffix)] if name.endswith(suffix) else path.stem


# ═══════════════════════════════════════════════════════════════════
#  Call-site discovery
# ═══════════════════════════════════════════════════════════════════


def _find_factory_calls(tokens: list[Token], factory: str) -> list[int]:
    """Token indices of ``factory(`` call sites.

    ``function factory(`` declarations and ``obj.factory(`` member calls
    are not call sites.
    """
    sites: list[int] = []
    for i, tok in enumerate(tokens):
        if not tok.is_ident(factory):
            continue
        prev = tokens[i - 1] if i > 0 else None
        if prev is not None and (
            prev.is_ident("function") or prev.is_punct(".") or prev.is_punct("?.")
        ):
            continue
        nxt = tokens[i + 1] if i + 1 < len(tokens) else None
        if nxt is not None and (nxt.is_punct("(") or nxt.is_punct("<")):
            sites.append(i)
    return sites


def _open_paren_index(reader: ExpressionReader, tokens: list[Token], call_index: int) -> int:
    j = call_index + 1
    if tokens[j].is_punct("<"):
        after = reader.skip_type_arguments(j)
        if after is not None:
            return after
    return j


def _assigned_name(tokens: list[Token], call_index: int) -> str | None:
    """``const orderResource = defineResource(`` → 'orderResource'."""
    if call_index < 3:
        return None
    eq, ident, keyword = tokens[call_index - 1], tokens[call_index - 2], tokens[call_index - 3]
    if eq.is_punct("=") and ident.kind == TK_IDENT and keyword.kind == TK_IDENT:
        if keyword.value in _DECLARATION_KEYWORDS:
            return ident.value
    return None


def _collect_constants(tokens: list[Token], reader: ExpressionReader) -> dict[str, Chain]:
    """Top-level ``const NAME = <chain>`` declarations, for kind lookups."""
    constants: dict[str, Chain] = {}
    for i in range(len(tokens) - 3):
        if not (tokens[i].kind == TK_IDENT and tokens[i].value in _DECLARATION_KEYWORDS):
            continue
        name_tok, eq = tokens[i + 1], tokens[i + 2]
        if name_tok.kind != TK_IDENT or not eq.is_punct("="):
            continue
        node, _ = reader.read_chain(i + 3)
        if node is not None:
            constants[name_tok.value] = node
    return constants


# ═══════════════════════════════════════════════════════════════════
#  Fields
# ═══════════════════════════════════════════════════════════════════


def _read_field(name: str, node: Node, constants: dict[str, Chain]) -> FieldDescriptor:
    if not isinstance(node, Chain):
        logger.debug("Field '%s' is not a modifier chain; kind unknown", name)
        return FieldDescriptor(name=name)

    chains = _resolve_chain(node, constants)
    type_name, ctor_args = _constructor(chains)
    is_optional = any(
        callee in _OPTIONAL_MODIFIERS for chain in chains for callee, _ in chain.calls()
    )

    return FieldDescriptor(
        name=name,
        base_kind=_KIND_BY_CONSTRUCTOR.get(type_name, "unknown"),
        type_name=type_name,
        is_optional=is_optional,
        enum_values=_enum_values(type_name, ctor_args),
        metadata=_read_meta(name, node),
    )


def _resolve_chain(node: Chain, constants: dict[str, Chain]) -> list[Chain]:
    """The field chain followed by the constants its head refers to.

    ``statusEnum.optional()`` with ``const statusEnum = z.enum([...])``
    → [statusEnum.optional(), z.enum([...])].
    """
    chains = [node]
    seen = {node.head}
    current = node
    while current.head != SCHEMA_NAMESPACE and current.head in constants:
        current = constants[current.head]
        chains.append(current)
        if current.head in seen:
            break
        seen.add(current.head)
    return chains


def _constructor(chains: list[Chain]) -> tuple[str, tuple[Node, ...]]:
    """Constructor name and its arguments from the innermost namespaced chain."""
    for chain in reversed(chains):
        if chain.head != SCHEMA_NAMESPACE:
            continue
        members = [m for m in chain.members() if m not in _NAMESPACE_PREFIXES]
        if not members:
            continue
        type_name = members[0]
        for callee, args in chain.calls():
            if callee == type_name:
                return type_name, args
        return type_name, ()
    return "unknown", ()


def _enum_values(type_name: str, args: tuple[Node, ...]) -> list[str]:
    if type_name != "enum" or not args or not isinstance(args[0], ArrayLit):
        return []
    return [
        e.value for e in args[0].elements
        if isinstance(e, Literal) and isinstance(e.value, str)
    ]


def _read_meta(field_name: str, chain: Chain) -> dict[str, Any]:
    """Recognised keys of the last ``.meta({...})`` call in the chain."""
    meta_args = [args for callee, args in chain.calls() if callee == _META_CALL]
    if not meta_args or not meta_args[-1] or not isinstance(meta_args[-1][0], ObjectLit):
        return {}
    raw = evaluate(meta_args[-1][0])
    meta = {k: v for k, v in raw.items() if k in RECOGNIZED_FIELD_META_KEYS}
    dropped = sorted(set(raw) - set(meta))
    if dropped:
        logger.debug("Field '%s': ignoring meta keys %s", field_name, ", ".join(dropped))
    return meta
