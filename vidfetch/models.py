"""Data structures shared by every extractor."""

from __future__ import annotations

import abc
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class URLParseFailedError(Exception):
    """Raised when a page does not contain the data an extractor looks for."""

    def __init__(self, message: str = "url parse failed") -> None:
        super().__init__(message)


@dataclass
class Part:
    """A single downloadable piece of a stream."""

    url: str = ""
    size: int = 0
    ext: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "size": self.size, "ext": self.ext}


@dataclass
class CaptionPart(Part):
    """A caption file, optionally converted by ``transform`` after download."""

    transform: Callable[[bytes], bytes] | None = None


@dataclass
class Stream:
    """One quality variant of a video, such as 720P or 1080P."""

    id: str = ""
    quality: str = ""
    parts: list[Part] = field(default_factory=list)
    size: int = 0
    ext: str = ""
    need_mux: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "quality": self.quality,
            "parts": [part.to_dict() for part in self.parts],
            "size": self.size,
            "ext": self.ext,
            "NeedMux": self.need_mux,
        }


class DataType(str, Enum):
    """Kind of extracted data."""

    VIDEO = "video"
    IMAGE = "image"


_MERGED_INTO_MP4 = frozenset({"ts", "flv", "f4v"})


@dataclass
class Data:
    """Everything extracted from one URL."""

    url: str = ""
    site: str = ""
    title: str = ""
    type: DataType | str = ""
    streams: dict[str, Stream] = field(default_factory=dict)
    captions: dict[str, CaptionPart] = field(default_factory=dict)
    error: Exception | None = None

    def fill_up_streams_data(self) -> None:
        """Fill in stream ids, qualities, merged extensions and total sizes."""
        for stream_id, stream in self.streams.items():
            stream.id = stream_id
            if not stream.quality:
                stream.quality = stream_id

            if self.type == DataType.VIDEO and not stream.ext:
                ext = stream.parts[0].ext
                stream.ext = "mp4" if ext in _MERGED_INTO_MP4 else ext

            if stream.size > 0:
                continue
            stream.size = sum(part.size for part in stream.parts)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready representation."""
        data_type = self.type.value if isinstance(self.type, DataType) else self.type
        return {
            "url": self.url,
            "site": self.site,
            "title": self.title,
            "type": data_type,
            "streams": {key: stream.to_dict() for key, stream in self.streams.items()},
            "caption": {key: part.to_dict() for key, part in self.captions.items()},
            "err": str(self.error) if self.error is not None else None,
        }


def empty_data(url: str, error: Exception | None) -> Data:
    """Return a Data holding only the URL and the error that stopped extraction."""
    return Data(url=url, error=error)


@dataclass
class Options:
    """Settings that may be used by an extraction."""

    playlist: bool = False
    items: str = ""
    item_start: int = 0
    item_end: int = 0
    thread_number: int = 0
    cookie: str = ""
    episode_title_only: bool = False
    youku_ccode: str = ""
    youku_ckey: str = ""
    youku_password: str = ""


class Extractor(abc.ABC):
    """Interface of every site extractor."""

    @abc.abstractmethod
    def extract(self, url: str, option: Options) -> list[Data]:
        """Extract the data behind ``url``."""