from typing import Any, Dict, Iterable, Mapping


def deep_union(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge ``override`` into a copy of ``base``.

    Nested mappings present on both sides are merged recursively; any other
    value from ``override`` replaces the one in ``base``. Key order follows
    ``base`` first, then keys only found in ``override``.
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = deep_union(current, value)
        else:
            merged[key] = value
    return merged


def merge_documents(documents: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    for document in documents:
        if document:
            merged = deep_union(merged, document)
    return merged
