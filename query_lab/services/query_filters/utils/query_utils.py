"""
Helpers for reading query sources and copying default values
"""

from __future__ import annotations

import copy
from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, urlsplit


QueryPairs = List[Tuple[str, str]]


def clone_default(value: Any) -> Any:
    """
    Return a copy of a filter default that shares no mutable state with it

    Args:
        value: The configured default value

    Returns:
        A fresh list for list defaults, a deep copy for dict defaults,
        the value itself for scalars
    """
    if isinstance(value, list):
        return list(value)
    if isinstance(value, (dict, set, tuple)):
        return copy.deepcopy(value)
    return value


def _split_query_string(raw: str) -> QueryPairs:
    parts = urlsplit(raw)
    if (parts.scheme and parts.netloc) or raw.startswith("/"):
        raw = parts.query
    elif raw.startswith("?"):
        raw = raw[1:]
    return parse_qsl(raw, keep_blank_values=True)


def resolve_query(source: Any = None) -> QueryPairs:
    """
    Turn any supported query source into ordered key/value pairs

    Args:
        source: A query string, URL, mapping, sequence of pairs, an object
            exposing ``query`` or ``search``, a zero-argument callable
            returning one of these, or None

    Returns:
        List of (key, value) pairs in the order they appear in the source
    """
    if callable(source):
        source = source()
    if source is None:
        return []
    if isinstance(source, (str, bytes)):
        text = source.decode("utf-8") if isinstance(source, bytes) else source
        return _split_query_string(text)
    if hasattr(source, "multi_items"):
        return [(str(key), str(value)) for key, value in source.multi_items()]
    if isinstance(source, Mapping):
        pairs: QueryPairs = []
        for key, value in source.items():
            if isinstance(value, (list, tuple)):
                pairs.extend((str(key), str(item)) for item in value)
            else:
                pairs.append((str(key), "" if value is None else str(value)))
        return pairs
    for attr in ("query", "search"):
        nested = getattr(source, attr, None)
        if isinstance(nested, (str, bytes)):
            return resolve_query(nested)
    return [(str(key), str(value)) for key, value in source]


def first_value(pairs: QueryPairs, key: str) -> Optional[str]:
    for pair_key, value in pairs:
        if pair_key == key:
            return value
    return None


def ordered_keys(pairs: QueryPairs) -> List[str]:
    seen: List[str] = []
    for key, _ in pairs:
        if key not in seen:
            seen.append(key)
    return seen


def bracket_key_transform(prefix: str):
    """
    Build a key transform that nests names under ``prefix``, e.g. ``filter[brands]``
    """
    def transform(name: str) -> str:
        return f"{prefix}[{name}]"

    return transform
