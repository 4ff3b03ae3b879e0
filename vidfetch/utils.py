"""String, path, JSON and URL helpers used by the extractors."""

from __future__ import annotations

import hashlib
import json
import os
import re
import sys
from decimal import Decimal
from typing import IO, Any
from urllib.parse import unquote, urljoin, urlsplit

from vidfetch import request
from vidfetch.download import need_download_list
from vidfetch.models import URLParseFailedError

_ELLIPSIS = "..."

_DOMAIN_PATTERN = (
    r"([a-z0-9][-a-z0-9]{0,62})\."
    r"(com\.cn|com\.hk|"
    r"cn|com|net|edu|gov|biz|org|info|pro|name|xxx|xyz|be|"
    r"me|top|cc|tv|tt)"
)

_NAME_REPLACEMENTS = {
    "\n": " ",
    "/": " ",
    "|": "-",
    ": ": "：",
    ":": "：",
    "'": "’",
}
_WINDOWS_REPLACEMENTS = {
    '"': " ",
    "?": " ",
    "*": " ",
    "\\": " ",
    "<": " ",
    ">": " ",
}


def _replacer(table: dict[str, str]):
    pattern = re.compile("|".join(re.escape(key) for key in table))
    return lambda text: pattern.sub(lambda match: table[match.group(0)], text)


_replace_name = _replacer(_NAME_REPLACEMENTS)
_replace_windows = _replacer(_WINDOWS_REPLACEMENTS)


def _split_json_path(path: str) -> list[str]:
    keys: list[str] = []
    current: list[str] = []
    chars = iter(path)
    for char in chars:
        if char == "\\":
            current.append(next(chars, ""))
        elif char == ".":
            keys.append("".join(current))
            current = []
        else:
            current.append(char)
    keys.append("".join(current))
    return keys


def _json_value_to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, Decimal)):
        return str(value)
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=float)


def get_string_from_json(json_text: str, path: str) -> str:
    """Return the value at a dotted ``path`` of a JSON document as a string.

    Array elements are addressed by index and ``#`` gives an array's length.
    A missing value gives an empty string.
    """
    try:
        value: Any = json.loads(json_text, parse_float=Decimal)
    except ValueError:
        return ""
    for key in _split_json_path(path):
        if isinstance(value, dict):
            if key not in value:
                return ""
            value = value[key]
        elif isinstance(value, list):
            if key == "#":
                value = len(value)
            elif key.isdigit() and int(key) < len(value):
                value = value[int(key)]
            else:
                return ""
        else:
            return ""
    return _json_value_to_string(value)


def match_one_of(text: str, *args: str) -> list[str] | None:
    """Return the full match and groups of the first pattern that matches, else None."""
    for pattern in args:
        match = re.search(pattern, text)
        if match is not None:
            return [match.group(0), *match.groups(default="")]
    return None


def match_all(text: str, pattern: str) -> list[list[str]]:
    """Return the full match and groups of every match of ``pattern``."""
    return [
        [match.group(0), *match.groups(default="")]
        for match in re.finditer(pattern, text)
    ]


def file_size(file_path: str | os.PathLike) -> tuple[int, bool]:
    """Return the size of a file and whether it exists."""
    try:
        return os.stat(file_path).st_size, True
    except FileNotFoundError:
        return 0, False


def domain(url: str) -> str:
    """Return the second-level domain name of ``url``, or an empty string."""
    found = match_one_of(url, _DOMAIN_PATTERN)
    return found[1] if found is not None else ""


def limit_length(s: str, length: int) -> str:
    """Shorten ``s`` to ``length`` characters ending in an ellipsis; 0 means unlimited."""
    if length == 0 or len(s) <= length:
        return s
    return s[: max(length - len(_ELLIPSIS), 0)] + _ELLIPSIS


def file_name(name: str, ext: str, length: int) -> str:
    """Turn ``name`` into a valid file name with the extension ``ext``."""
    name = _replace_name(name)
    if sys.platform == "win32":
        name = _replace_windows(name)
    limited = limit_length(name, length)
    if not ext:
        return limited
    return f"{limited}.{ext}"


def file_path(
    name: str, ext: str, length: int, output_path: str, escape: bool
) -> str:
    """Return the path of the output file, checking that ``output_path`` exists."""
    if output_path:
        os.stat(output_path)
    name_with_ext = file_name(name, ext, length) if escape else f"{name}.{ext}"
    return os.path.join(output_path, name_with_ext)


def file_line_counter(stream: IO) -> int:
    """Count the newline characters in a text or binary stream."""
    count = 0
    while True:
        chunk = stream.read(32 * 1024)
        if not chunk:
            return count
        count += chunk.count("\n" if isinstance(chunk, str) else b"\n")


def parse_input_file(stream: IO, items: str, item_start: int, item_end: int) -> list[str]:
    """Return the wanted lines of an input file, stripped of surrounding space."""
    lines = [
        (line.decode() if isinstance(line, bytes) else line).strip()
        for line in stream
    ]
    wanted = set(need_download_list(items, item_start, item_end, len(lines)))
    return [line for number, line in enumerate(lines, 1) if number in wanted]


def item_in_slice(item: Any, items) -> bool:
    """Tell whether ``items`` holds a value of the same type equal to ``item``."""
    return any(type(entry) is type(item) and entry == item for entry in items)


def get_name_and_ext(uri: str) -> tuple[str, str]:
    """Return the file name and extension of a URL.

    When the path has no extension, it is taken from the Content-Type.
    """
    parts = urlsplit(uri)
    if not parts.scheme and not uri.startswith("/"):
        raise ValueError(f"invalid URI for request: {uri!r}")
    base = unquote(parts.path).split("/")[-1]
    pieces = base.split(".")
    if len(pieces) > 1:
        return pieces[0], pieces[1]
    media_type = request.content_type(uri, uri)
    kind = media_type.split("/")
    if len(kind) < 2:
        raise URLParseFailedError(f"no extension in Content-Type {media_type!r}")
    return pieces[0], kind[1]


def md5(text: str) -> str:
    """Return the hex MD5 digest of ``text``."""
    return hashlib.md5(text.encode()).hexdigest()


def m3u8_urls(uri: str) -> list[str]:
    """Return the absolute URLs of every entry in an m3u8 playlist."""
    if not uri:
        raise ValueError("url is null")
    playlist = request.get(uri, "", None)
    urls = []
    for line in playlist.split("\n"):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("http"):
            urls.append(line)
            continue
        try:
            urls.append(urljoin(uri, line))
        except ValueError:
            continue
    return urls


def reverse(s: str) -> str:
    """Return ``s`` with its characters in reverse order."""
    return s[::-1]