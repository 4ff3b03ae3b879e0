"""Extractor for tumblr.com images and videos."""

from __future__ import annotations

import json

from vidfetch import parser, request
from vidfetch.models import (
    Data,
    DataType,
    Extractor as BaseExtractor,
    Options,
    Part,
    Stream,
    URLParseFailedError,
)
from vidfetch.utils import get_name_and_ext, match_one_of

SITE = "Tumblr tumblr.com"


def _gen_url_data(url: str, referer: str) -> tuple[Part, int]:
    part_size = request.size(url, referer)
    _, ext = get_name_and_ext(url)
    return Part(url=url, size=part_size, ext=ext), part_size


def _image_urls(json_string: str) -> list[str]:
    document = json.loads(json_string)
    image = document.get("image") if isinstance(document, dict) else None
    if '"image":{"@list"' in json_string:
        urls = image.get("@list", []) if isinstance(image, dict) else []
        if not isinstance(urls, list) or not all(isinstance(u, str) for u in urls):
            raise URLParseFailedError("unexpected image list")
        return urls
    if image is None:
        image = ""
    if not isinstance(image, str):
        raise URLParseFailedError("unexpected image value")
    return [image]


def _image_download(url: str, html: str, title: str) -> list[Data]:
    json_strings = match_one_of(html, r'<script type="application/ld\+json">\s*(.+?)</script>')
    if json_strings is None or len(json_strings) < 2:
        raise URLParseFailedError()

    parts = []
    total_size = 0
    for image_url in _image_urls(json_strings[1]):
        part, part_size = _gen_url_data(image_url, url)
        total_size += part_size
        parts.append(part)

    return [
        Data(
            site=SITE,
            title=title,
            type=DataType.IMAGE,
            streams={"default": Stream(parts=parts, size=total_size)},
            url=url,
        )
    ]


def _video_download(url: str, html: str, title: str) -> list[Data]:
    video_urls = match_one_of(html, r"<iframe src='(.+?)'")
    if video_urls is None or len(video_urls) < 2:
        raise URLParseFailedError()
    video_url = video_urls[1]
    if "tumblr.com/video" not in video_url:
        raise ValueError("this URL is not supported right now")

    video_html = request.get(video_url, url, None)
    real_urls = match_one_of(video_html, r'source src="(.+?)"')
    if real_urls is None or len(real_urls) < 2:
        raise URLParseFailedError()

    part, part_size = _gen_url_data(real_urls[1], url)
    return [
        Data(
            site=SITE,
            title=title,
            type=DataType.VIDEO,
            streams={"default": Stream(parts=[part], size=part_size)},
            url=url,
        )
    ]


class Extractor(BaseExtractor):
    """Extracts the images or the video of a Tumblr post."""

    def extract(self, url: str, option: Options) -> list[Data]:
        html = request.get(url, url, None)
        title = parser.title(parser.get_doc(html))
        if "<iframe src=" in html:
            return _video_download(url, html, title)
        return _image_download(url, html, title)


def new() -> Extractor:
    """Return a Tumblr extractor."""
    return Extractor()