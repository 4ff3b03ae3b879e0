"""Selection of playlist or input-file items to download."""

from __future__ import annotations

import re

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _to_int(text: str) -> int:
    """Parse a decimal integer, treating anything unparsable as zero."""
    text = text.strip()
    return int(text) if _INTEGER.fullmatch(text) else 0


def number_range(low: int, high: int) -> list[int]:
    """Return the integers from ``low`` to ``high``, both included."""
    return list(range(low, high + 1))


def need_download_list(items: str, item_start: int, item_end: int, length: int) -> list[int]:
    """Return the 1-based indices of the items that should be downloaded.

    ``items`` is a comma separated selection such as ``"1,5,6,8-10"``; when it
    is empty the range ``item_start``..``item_end`` is used, where an end of 0
    means the last item.
    """
    if items:
        selected: list[int] = []
        for selection in items.split(","):
            bounds = selection.split("-")
            start = _to_int(bounds[0])
            end = _to_int(bounds[1]) if len(bounds) >= 2 else start
            selected.extend(range(start, end + 1))
        return selected

    item_start = max(item_start, 1)
    if item_end == 0:
        item_end = length
    item_end = max(item_end, item_start)
    return number_range(item_start, item_end)