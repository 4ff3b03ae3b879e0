"""Extractor for xvideos.com videos."""

from __future__ import annotations

from dataclasses import dataclass

from vidfetch import request
from vidfetch.models import Data, DataType, Extractor as BaseExtractor, Options, Part, Stream
from vidfetch.utils import match_one_of

SITE = "XVIDEOS xvideos.com"

_LOW_FLAG = "html5player.setVideoUrlLow('"
_LOW_FINAL_FLAG = "');\n\t    html5player.setVideoUrlHigh("
_HIGH_FLAG = "html5player.setVideoUrlHigh('"
_HIGH_FINAL_FLAG = "');\n\t    html5player.setVideoHLS("
QUALITY_LOW = "low"
QUALITY_HIGH = "high"


@dataclass(frozen=True)
class Source:
    """A video address and its quality."""

    url: str
    quality: str


def _between(html: str, start_flag: str, end_flag: str) -> str | None:
    start = html.find(start_flag)
    end = html.find(end_flag)
    if start == -1 or end == -1:
        return None
    start += len(start_flag)
    if start > end:
        return None
    return html[start:end]


def get_src(html: str) -> list[Source]:
    """Return the low and high quality sources found in the page."""
    sources = []
    for start_flag, end_flag, quality in (
        (_LOW_FLAG, _LOW_FINAL_FLAG, QUALITY_LOW),
        (_HIGH_FLAG, _HIGH_FINAL_FLAG, QUALITY_HIGH),
    ):
        url = _between(html, start_flag, end_flag)
        if url is not None:
            sources.append(Source(url=url, quality=quality))
    return sources


class Extractor(BaseExtractor):
    """Extracts the low and high quality streams of a video."""

    def extract(self, url: str, option: Options) -> list[Data]:
        html = request.get(url, url, None)
        desc = match_one_of(html, r"<title>(.+?)</title>")
        title = desc[1] if desc is not None and len(desc) > 1 else "xvideos"

        streams: dict[str, Stream] = {}
        for source in get_src(html):
            video_size = request.size(source.url, url)
            streams[source.quality] = Stream(
                parts=[Part(url=source.url, size=video_size, ext="mp4")],
                size=video_size,
                quality=source.quality,
            )
        return [
            Data(
                site=SITE,
                title=title,
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]


def new() -> Extractor:
    """Return an xvideos extractor."""
    return Extractor()