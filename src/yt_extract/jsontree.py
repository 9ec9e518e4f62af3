"""Helpers for walking untyped JSON trees scraped from the watch page."""
from __future__ import annotations

from typing import Any, Callable, Union

JsonValue = Union[str, int, float, bool, None, list, dict]

MAX_DEPTH = 50


def safe_get(obj: JsonValue, *keys: str | int, default: Any = None) -> Any:
    """Follow ``keys`` through nested dicts/lists, returning ``default`` on any miss."""
    current: Any = obj
    for key in keys:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return default
            current = current[key]
        else:
            if not isinstance(current, dict) or key not in current:
                return default
            current = current[key]
    return current


def find_key_with_path(
    data: JsonValue, target_key: str, path: str = "", max_depth: int = MAX_DEPTH
) -> tuple[str, Any] | None:
    """
    Depth-first search for the first occurrence of ``target_key``.

    Returns ``(path, value)`` where path reads like ``a->b[2]->target``,
    or None. Subtrees deeper than ``max_depth`` are not visited.
    """
    if max_depth < 0:
        return None
    if isinstance(data, dict):
        for key, value in data.items():
            current_path = f"{path}->{key}" if path else key
            if key == target_key:
                return current_path, value
            found = find_key_with_path(value, target_key, current_path, max_depth - 1)
            if found is not None:
                return found
    elif isinstance(data, list):
        for i, item in enumerate(data):
            found = find_key_with_path(item, target_key, f"{path}[{i}]", max_depth - 1)
            if found is not None:
                return found
    return None


def find_first(
    data: JsonValue, predicate: Callable[[dict], Any], max_depth: int = MAX_DEPTH
) -> Any:
    """Return the first truthy ``predicate(node)`` over every dict node, pre-order."""
    if max_depth < 0:
        return None
    if isinstance(data, dict):
        hit = predicate(data)
        if hit:
            return hit
        children = data.values()
    elif isinstance(data, list):
        children = data
    else:
        return None
    for child in children:
        hit = find_first(child, predicate, max_depth - 1)
        if hit:
            return hit
    return None
