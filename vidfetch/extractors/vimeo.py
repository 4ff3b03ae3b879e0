"""Extractor for vimeo.com videos."""

from __future__ import annotations

import json
from typing import Any

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

SITE = "Vimeo vimeo.com"
PLAYER_URL = "https://player.vimeo.com/video/"

_CONFIG_PATTERN = r"var \w+\s?=\s?({.+?});"


def _obj(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _page(url: str) -> str:
    if "player.vimeo.com" in url:
        return request.get(url, url, None)
    found = match_one_of(url, r"vimeo\.com/(\d+)")
    if found is None or len(found) < 2:
        raise URLParseFailedError()
    return request.get(PLAYER_URL + found[1], url, None)


class Extractor(BaseExtractor):
    """Extracts every progressive stream of a Vimeo video."""

    def extract(self, url: str, option: Options) -> list[Data]:
        html = _page(url)
        json_strings = match_one_of(html, _CONFIG_PATTERN)
        if json_strings is None or len(json_strings) < 2:
            raise URLParseFailedError()

        config = _obj(json.loads(json_strings[1]))
        progressive = _obj(_obj(config.get("request")).get("files")).get("progressive") or []
        title = _obj(config.get("video")).get("title", "")

        streams: dict[str, Stream] = {}
        for video in progressive:
            video = _obj(video)
            video_url = video.get("url", "")
            video_size = request.size(video_url, url)
            streams[str(video.get("profile", 0))] = Stream(
                parts=[Part(url=video_url, size=video_size, ext="mp4")],
                size=video_size,
                quality=video.get("quality", ""),
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
    """Return a Vimeo extractor."""
    return Extractor()