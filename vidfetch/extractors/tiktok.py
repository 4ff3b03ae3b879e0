"""Extractor for tiktok.com videos."""

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
from vidfetch.utils import get_string_from_json, match_one_of

SITE = "TikTok tiktok.com"

_VIDEO_OBJECT = r'<script type="application\/ld\+json" id="videoObject">(.*?)<\/script>'
_NEXT_DATA = (
    r'<script id="__NEXT_DATA__" type="application\/json" crossorigin="anonymous">(.*?)<\/script>'
)


class Extractor(BaseExtractor):
    """Extracts a single TikTok video."""

    def extract(self, url: str, option: Options) -> list[Data]:
        html = request.get(url, url, None)

        video_tag = match_one_of(html, _VIDEO_OBJECT)
        if video_tag is None or len(video_tag) < 2:
            raise URLParseFailedError()
        video_url = get_string_from_json(video_tag[1], "contentUrl")

        next_tag = match_one_of(html, _NEXT_DATA)
        if next_tag is None or len(next_tag) < 2:
            raise URLParseFailedError()
        title = get_string_from_json(next_tag[1], "props.pageProps.videoData.itemInfos.text")

        video_size = request.size(video_url, url)
        stream = Stream(parts=[Part(url=video_url, size=video_size, ext="mp4")], size=video_size)
        return [
            Data(
                site=SITE,
                title=title,
                type=DataType.VIDEO,
                streams={"default": stream},
                url=url,
            )
        ]


def new() -> Extractor:
    """Return a TikTok extractor."""
    return Extractor()