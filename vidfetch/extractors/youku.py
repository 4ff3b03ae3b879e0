"""Extractor for youku.com videos."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import random
import struct
import time
from typing import Any
from urllib.parse import quote_plus

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

SITE = "优酷 youku.com"
REFERER = "https://v.youku.com"

_AUDIO_LANGS = {
    "guoyu": "国语",
    "ja": "日语",
    "yue": "粤语",
}
_UTDID_SALT = b"d6fc3a4a06adbde89223bvefedc24fecde188aaa9161"
_UTDID_CCODE = "0103010102"


def get_audio_lang(lang: str) -> str:
    """Return the display name of an audio language code."""
    return _AUDIO_LANGS.get(lang, lang)


def _int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _int32_bytes(value: int) -> bytes:
    return struct.pack(">i", _int32(value))


def hash_code(s: str) -> int:
    """Return the 32-bit signed ``s[0]*31^(n-1) + ... + s[n-1]`` hash of a string."""
    result = 0
    for char in s:
        result = _int32(result * 0x1F + ord(char))
    return result


def generate_utdid() -> str:
    """Return a freshly generated device id."""
    timestamp = _int32(int(time.time()))
    buffer = bytearray(_int32_bytes(timestamp - 60 * 60 * 8))
    buffer += _int32_bytes(random.randrange(1 << 31))
    buffer += b"\x03\x00"
    imei = str(random.randrange(1 << 31))
    buffer += _int32_bytes(hash_code(imei))
    digest = hmac.new(_UTDID_SALT, bytes(buffer), hashlib.sha1).digest()
    buffer += _int32_bytes(hash_code(base64.b64encode(digest).decode("ascii")))
    return base64.b64encode(bytes(buffer)).decode("ascii")


def _obj(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def gen_data(youku_data: dict) -> dict[str, Stream]:
    """Build the streams from the ``data`` object of an ups response."""
    streams: dict[str, Stream] = {}
    for stream in youku_data.get("stream") or []:
        stream = _obj(stream)
        stream_type = stream.get("stream_type", "")
        audio_lang = stream.get("audio_lang", "")
        resolution = f"{stream.get('width', 0)}x{stream.get('height', 0)}"
        if audio_lang == "default":
            key = stream_type
            quality = f"{stream_type} {resolution}"
        else:
            key = f"{stream_type}-{audio_lang}"
            quality = f"{stream_type} {resolution} {get_audio_lang(audio_lang)}"

        segs = [_obj(seg) for seg in stream.get("segs") or []]
        if not segs:
            raise URLParseFailedError("stream has no segments")
        ext = segs[0].get("cdn_url", "").split("?")[0].split(".")[-1]
        streams[key] = Stream(
            parts=[
                Part(url=seg.get("cdn_url", ""), size=int(seg.get("size", 0)), ext=ext)
                for seg in segs
            ],
            size=int(stream.get("size", 0)),
            quality=quality,
        )
    return streams


def _utid(option: Options) -> str:
    if "cna" in option.cookie:
        utids = match_one_of(option.cookie, r"cna=(.+?);", r"cna\s+(.+?)\s", r"cna\s+(.+?)$")
    else:
        response_headers = request.headers("http://log.mmstat.com/eg.js", REFERER)
        utids = match_one_of(response_headers.get("Set-Cookie", ""), r"cna=(.+?);")
    if utids is None or len(utids) < 2:
        raise URLParseFailedError()
    return utids[1]


def _ups(vid: str, option: Options) -> dict:
    utid = _utid(option)
    ccode = option.youku_ccode
    if ccode == _UTDID_CCODE:
        utid = generate_utdid()
    url = (
        f"https://ups.youku.com/ups/get.json?vid={vid}&ccode={ccode}"
        f"&client_ip=192.168.1.1&client_ts={int(time.time()) // 1000}"
        f"&utid={quote_plus(utid)}&ckey={quote_plus(option.youku_ckey)}"
    )
    if option.youku_password:
        url = f"{url}&password={option.youku_password}"
    return _obj(json.loads(request.get_bytes(url, REFERER, None)))


class Extractor(BaseExtractor):
    """Extracts a Youku video through the ups API."""

    def extract(self, url: str, option: Options) -> list[Data]:
        vids = match_one_of(url, r"id_(.+?)\.html", r"id_(.+)")
        if vids is None or len(vids) < 2:
            raise URLParseFailedError()

        data = _obj(_ups(vids[1], option).get("data"))
        error = _obj(data.get("error"))
        if error.get("code", 0) != 0:
            raise RuntimeError(error.get("note", ""))

        streams = gen_data(data)
        video_title = _obj(data.get("video")).get("title", "")
        show_title = _obj(data.get("show")).get("title", "")
        if not show_title or show_title in video_title:
            title = video_title
        else:
            title = f"{show_title} {video_title}"

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
    """Return a Youku extractor."""
    return Extractor()