"""Extractor for tangdou.com square-dance videos."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from vidfetch import request
from vidfetch.download import need_download_list
from vidfetch.models import (
    Data,
    DataType,
    Extractor as BaseExtractor,
    Options,
    Part,
    Stream,
    URLParseFailedError,
    empty_data,
)
from vidfetch.request import RequestError
from vidfetch.utils import match_all, match_one_of

REFERER = "http://www.tangdou.com/html/playlist/view/4173"
SITE = "糖豆广场舞 tangdou.com"

_PLAYLIST_ITEM = r'<a target="tdplayer" href="(.+?)" class="title">'
_TITLE_PATTERNS = (
    r'<div class="title">(.+?)</div>',
    r'<meta name="description" content="(.+?)"',
    r"<title>(.+?)</title>",
)
_VIDEO_PATTERNS = (r"video:'(.+?)'", r'video:"(.+?)"', r'<video.*src="(.+?)"')
_SHARE_PATTERN = r'<div class="video">\s*<script src="(.+?)"'
_SIGNED_PATTERN = r'src=\\"(.+?)\\"'


def _find_video_url(html: str, uri: str) -> str:
    video_urls = match_one_of(html, *_VIDEO_PATTERNS)
    if video_urls is not None:
        if len(video_urls) < 2:
            raise URLParseFailedError()
        return video_urls[1]

    share_urls = match_one_of(html, _SHARE_PATTERN)
    if share_urls is None or len(share_urls) < 2:
        raise URLParseFailedError()
    signed_video = request.get(share_urls[1], uri, None)
    real_urls = match_one_of(signed_video, _SIGNED_PATTERN)
    if real_urls is None or len(real_urls) < 2:
        raise URLParseFailedError()
    return real_urls[1]


def _download(uri: str) -> Data:
    """Extract a single video page; failures are recorded in the returned Data."""
    try:
        html = request.get(uri, REFERER, None)
        titles = match_one_of(html, *_TITLE_PATTERNS)
        if titles is None or len(titles) < 2:
            raise URLParseFailedError()
        real_url = _find_video_url(html, uri)
        video_size = request.size(real_url, uri)
    except (RequestError, URLParseFailedError) as exc:
        return empty_data(uri, exc)

    stream = Stream(parts=[Part(url=real_url, size=video_size, ext="mp4")], size=video_size)
    return Data(
        site=SITE,
        title=titles[1],
        type=DataType.VIDEO,
        streams={"default": stream},
        url=uri,
    )


class Extractor(BaseExtractor):
    """Extracts single videos or whole playlists from tangdou.com."""

    def extract(self, url: str, option: Options) -> list[Data]:
        if not option.playlist:
            return [_download(url)]

        html = request.get(url, REFERER, None)
        video_ids = match_all(html, _PLAYLIST_ITEM)
        wanted = set(
            need_download_list(option.items, option.item_start, option.item_end, len(video_ids))
        )
        uris = [
            match[1]
            for index, match in enumerate(video_ids, 1)
            if index in wanted and len(match) >= 2
        ]
        if not uris:
            return []
        workers = option.thread_number if option.thread_number > 0 else len(uris)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(_download, uris))


def new() -> Extractor:
    """Return a tangdou extractor."""
    return Extractor()