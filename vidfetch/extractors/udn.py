"""Extractor for video.udn.com news videos."""

from __future__ import annotations

from vidfetch import request
from vidfetch.models import (
    Data,
    DataType,
    Extractor as BaseExtractor,
    Options,
    Part,
    Stream,
    URLParseFailedError,
)
from vidfetch.utils import match_one_of

SITE = "udn udn.com"
_EMBED_PREFIX = "https://video.udn.com/embed/"
_START_FLAG = "',\n            mp4: '//"
_END_FLAG = "'\n        },\n        subtitles"
_TITLE_PATTERN = "title: '(.+?)',\n        link:"


def get_cdn_url(html: str) -> str:
    """Return the CDN address of the mp4 source, without its scheme, or an empty string."""
    found = match_one_of(html, _START_FLAG + "(.+?)" + _END_FLAG)
    if found is not None and len(found) > 1 and found[1]:
        return found[1]
    return ""


def prepare_embed_url(url: str) -> str:
    """Turn a udn video URL into its embed page URL."""
    if _EMBED_PREFIX in url:
        return url
    return "https://video.udn.com/embed/news/" + url.split("/")[-1]


class Extractor(BaseExtractor):
    """Extracts a single udn video."""

    def extract(self, url: str, option: Options) -> list[Data]:
        url = prepare_embed_url(url)
        if not url:
            raise URLParseFailedError()

        html = request.get(url, url, None)
        desc = match_one_of(html, _TITLE_PATTERN)
        title = desc[1] if desc is not None and len(desc) > 1 else "udn"

        cdn_url = get_cdn_url(html)
        if not cdn_url:
            raise URLParseFailedError("empty list")
        src_url = request.get("http://" + cdn_url, url, None)
        video_size = request.size(src_url, url)

        quality = "normal"
        stream = Stream(
            parts=[Part(url=src_url, size=video_size, ext="mp4")],
            size=video_size,
            quality=quality,
        )
        return [
            Data(
                site=SITE,
                title=title,
                type=DataType.VIDEO,
                streams={quality: stream},
                url=url,
            )
        ]


def new() -> Extractor:
    """Return a udn extractor."""
    return Extractor()