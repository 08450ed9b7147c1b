"""EDN (Extensible Data Notation) reader and writer for Python.

This module provides functions to parse EDN text into a value tree and
serialize a value tree back to EDN text.

Example usage:
    >>> from edn_py.edn import parse, stringify
    >>> forms = parse('{:name "Alice" :age 30} [1 2]')
    >>> forms[0]
    EdnMap({Keyword('name'): 'Alice', Keyword('age'): 30})
    >>> stringify(forms[0])
    '{"name" "Alice","age" 30}'
"""

from __future__ import annotations

from collections.abc import Mapping

from edn_py.exceptions import EDNParseError
from edn_py.edn.datetime_utils import (
    format_instant,
    from_epoch_millis,
    parse_datetime,
    to_epoch_millis,
)
from edn_py.edn.lexer import EdnLexer, Token, TokenType
from edn_py.edn.reader import EdnReader
from edn_py.edn.tags import (
    TagRegistry,
    TagTransformer,
    default_registry,
    transform_inst,
    transform_uuid,
)
from edn_py.edn.types import (
    NAMED_CHARS,
    Char,
    EDNValue,
    EdnList,
    EdnMap,
    EdnSet,
    EdnVector,
    Keyword,
    Kind,
    Symbol,
    Tagged,
    structural_key,
)
from edn_py.edn.writer import stringify

TagTransformers = Mapping[str, TagTransformer | None] | TagRegistry


def _decode(s: str | bytes) -> str:
    if isinstance(s, bytes):
        try:
            return s.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EDNParseError(f"Invalid UTF-8 encoding: {e}") from e
    return s


def parse(
    s: str | bytes,
    tag_transformers: TagTransformers | None = None,
    *,
    max_depth: int = 100,
) -> EdnList:
    """Parse an EDN document into a list of its top-level forms.

    Args:
        s: The EDN text (or UTF-8 bytes) to parse.
        tag_transformers: Tag name -> transformer mapping merged over the
            default registry for this call only (a ``None`` value disables a
            default), or a complete TagRegistry to use instead.
        max_depth: Maximum nesting depth allowed (default 100).

    Returns:
        An EdnList holding every top-level form in input order.

    Raises:
        EDNParseError: If the input is invalid EDN or invalid UTF-8.

    Examples:
        >>> parse('(1 2 3)')
        EdnList([EdnList([1, 2, 3])])
        >>> parse('#{1 1 2}')[0] == EdnSet({1, 2})
        True
    """
    registry = default_registry.merged(tag_transformers)
    reader = EdnReader(_decode(s), max_depth=max_depth, tag_registry=registry)
    return reader.read_all()


def loads(
    s: str | bytes,
    tag_transformers: TagTransformers | None = None,
    *,
    max_depth: int = 100,
) -> EDNValue:
    """Parse EDN text holding a single form and return that form.

    Returns None for empty input (as well as for ``nil``).

    Raises:
        EDNParseError: If the input is invalid or holds more than one form.
    """
    forms = parse(s, tag_transformers, max_depth=max_depth)
    if len(forms) > 1:
        raise EDNParseError(f"Expected a single EDN form, found {len(forms)}")
    return forms[0] if forms else None


dumps = stringify


__all__ = [
    "parse",
    "loads",
    "stringify",
    "dumps",
    "EdnReader",
    "EdnLexer",
    "Token",
    "TokenType",
    "EDNParseError",
    "EDNValue",
    "NAMED_CHARS",
    "Kind",
    "Symbol",
    "Keyword",
    "Char",
    "EdnList",
    "EdnVector",
    "EdnMap",
    "EdnSet",
    "Tagged",
    "structural_key",
    "TagRegistry",
    "TagTransformer",
    "TagTransformers",
    "default_registry",
    "transform_inst",
    "transform_uuid",
    "parse_datetime",
    "format_instant",
    "to_epoch_millis",
    "from_epoch_millis",
]
