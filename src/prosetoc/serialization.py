"""Outline serialization: JSON round-trip for OutlineResult.

Useful for caching outlines outside the process and for handing them to
non-Python templating layers.

All output is deterministic (sorted keys). Heading levels are not bounded,
so an outline can nest thousands of entries deep; every conversion here
walks the tree with an explicit stack instead of recursing.

Example:
    from prosetoc import build_outline
    from prosetoc.serialization import to_json, from_json

    result = build_outline(tree)
    assert from_json(to_json(result)) == result

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from typing import Any

from prosetoc.nodes import OutlineEntry, OutlineResult


def entry_to_dict(entry: OutlineEntry) -> dict[str, Any]:
    """Convert an OutlineEntry (and its subtree) to a JSON-compatible dict."""
    root = _entry_fields(entry)
    pending = [(entry, root)]
    while pending:
        current, data = pending.pop()
        for child in current.children:
            child_data = _entry_fields(child)
            data["children"].append(child_data)
            pending.append((child, child_data))
    return root


def _entry_fields(entry: OutlineEntry) -> dict[str, Any]:
    return {"id": entry.id, "title": entry.title, "level": entry.level, "children": []}


def to_dict(result: OutlineResult) -> dict[str, Any]:
    """Convert an OutlineResult to a JSON-compatible dict.

    Args:
        result: Outline to serialize.

    Returns:
        Dict with ``entries`` and ``total_results``.

    """
    return {
        "entries": [entry_to_dict(entry) for entry in result.entries],
        "total_results": result.total_results,
    }


def _check_entry(data: Any) -> tuple[str, str, int, list]:
    """Validate one serialized entry; return its fields and raw children."""
    if not isinstance(data, dict):
        msg = f"Expected entry dict, got {type(data).__name__}"
        raise ValueError(msg)
    try:
        entry_id = data["id"]
        title = data["title"]
        level = data["level"]
    except KeyError as e:
        msg = f"Missing {e.args[0]!r} field in serialized entry"
        raise ValueError(msg) from e
    if not isinstance(entry_id, str) or not isinstance(title, str):
        msg = "Entry 'id' and 'title' must be strings"
        raise ValueError(msg)
    if not isinstance(level, int) or isinstance(level, bool):
        msg = f"Entry 'level' must be an int, got {level!r}"
        raise ValueError(msg)
    children = data.get("children", [])
    if not isinstance(children, list):
        msg = "Entry 'children' must be a list"
        raise ValueError(msg)
    return entry_id, title, level, children


def entry_from_dict(data: dict[str, Any]) -> OutlineEntry:
    """Reconstruct an OutlineEntry from a dict produced by ``entry_to_dict``.

    Raises:
        ValueError: If a required field is missing or has the wrong type.

    """
    # Post-order: each finished entry lands on ``built``; a parent takes
    # its children off the end once they are all done.
    built: list[OutlineEntry] = []
    pending: list[tuple[Any, tuple[str, str, int, list] | None]] = [(data, None)]
    while pending:
        current, fields = pending.pop()
        if fields is None:
            fields = _check_entry(current)
            pending.append((current, fields))
            pending.extend((child, None) for child in reversed(fields[3]))
            continue
        entry_id, title, level, children = fields
        split = len(built) - len(children)
        child_entries = tuple(built[split:])
        del built[split:]
        built.append(OutlineEntry(id=entry_id, title=title, level=level, children=child_entries))
    return built[0]


def from_dict(data: dict[str, Any]) -> OutlineResult:
    """Reconstruct an OutlineResult from a dict.

    ``total_results`` is optional; when present it must be an int equal to
    the number of entries in the whole outline.

    Raises:
        ValueError: If the dict doesn't represent an outline.

    """
    if not isinstance(data, dict) or "entries" not in data:
        msg = "Missing 'entries' field in serialized outline"
        raise ValueError(msg)
    entries = data["entries"]
    if not isinstance(entries, list):
        msg = "Outline 'entries' must be a list"
        raise ValueError(msg)
    result_entries = tuple(entry_from_dict(entry) for entry in entries)
    count = sum(1 for entry in result_entries for _ in entry.walk())

    total = data.get("total_results", count)
    if not isinstance(total, int) or isinstance(total, bool):
        msg = f"Outline 'total_results' must be an int, got {total!r}"
        raise ValueError(msg)
    if total != count:
        msg = f"Outline 'total_results' is {total} but the outline has {count} entries"
        raise ValueError(msg)
    return OutlineResult(entries=result_entries, total_results=total)


def _encode(value: Any, indent: int | None) -> str:
    """Encode dicts, lists and scalars like ``json.dumps(sort_keys=True)``."""
    parts: list[str] = []
    # str items are literal output; tuple items are (value, depth) to encode.
    pending: list[str | tuple[Any, int]] = [(value, 0)]
    while pending:
        item = pending.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        current, depth = item
        if isinstance(current, dict):
            opener, closer = "{", "}"
            members = [
                (json.dumps(key, ensure_ascii=False) + ": ", current[key])
                for key in sorted(current)
            ]
        elif isinstance(current, list):
            opener, closer = "[", "]"
            members = [("", member) for member in current]
        else:
            parts.append(json.dumps(current, ensure_ascii=False))
            continue

        if not members:
            parts.append(opener + closer)
            continue
        if indent is None:
            start, between, end = "", ", ", ""
        else:
            start = "\n" + " " * (indent * (depth + 1))
            between = "," + start
            end = "\n" + " " * (indent * depth)

        work: list[str | tuple[Any, int]] = [opener + start]
        for position, (prefix, member) in enumerate(members):
            if position:
                work.append(between)
            if prefix:
                work.append(prefix)
            work.append((member, depth + 1))
        work.append(end + closer)
        pending.extend(reversed(work))
    return "".join(parts)


def to_json(result: OutlineResult, *, indent: int | None = None) -> str:
    """Serialize an OutlineResult to a JSON string.

    Output matches ``json.dumps(to_dict(result), sort_keys=True,
    ensure_ascii=False, indent=indent)`` at any nesting depth.

    Args:
        result: Outline to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return _encode(to_dict(result), indent)


def from_json(data: str) -> OutlineResult:
    """Deserialize an OutlineResult from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent an outline, or nests
            deeper than the JSON decoder supports.

    """
    try:
        raw = json.loads(data)
    except RecursionError as e:
        msg = "Serialized outline is nested too deeply to decode"
        raise ValueError(msg) from e
    return from_dict(raw)
