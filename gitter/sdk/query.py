"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Gitter client, a product of Garudex Labs

Query-string encoding with bracket notation.

Sequences of scalars encode as repeated bracketed keys (``a[]=1&a[]=2``),
nested mappings as ``a[b]=1`` and mappings inside sequences with explicit
indices (``a[0][b]=1``). Keys and values are percent-encoded (RFC 3986).
"""

from __future__ import annotations

from typing import Any, Iterator, List, Mapping, Tuple
from urllib.parse import quote


def encode_query(query: Mapping[str, Any]) -> str:
    """Encode ``query`` into a query string, preserving key order.

    ``None`` encodes as an empty value, booleans as ``true``/``false``.
    Empty sequences and empty mappings contribute nothing.
    """
    pairs = [
        f"{quote(key, safe='')}={quote(value, safe='')}"
        for key, value in flatten_query(query)
    ]
    return "&".join(pairs)


def flatten_query(query: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """Flatten ``query`` into ``(bracketed_key, text_value)`` pairs."""
    pairs: List[Tuple[str, str]] = []
    for key, value in query.items():
        pairs.extend(_flatten(str(key), value))
    return pairs


def _flatten(key: str, value: Any) -> Iterator[Tuple[str, str]]:
    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            yield from _flatten(f"{key}[{sub_key}]", sub_value)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            if isinstance(item, (Mapping, list, tuple)):
                yield from _flatten(f"{key}[{index}]", item)
            else:
                yield f"{key}[]", _scalar(item)
    else:
        yield key, _scalar(value)


def _scalar(value: Any) -> str:
    if value is None:
        return ""
    if value is True:
        return "true"
    if value is False:
        return "false"
    return str(value)
