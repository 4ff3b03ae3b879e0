"""Extractor for yinyuetai.com music videos."""

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

SITE = "音悦台 yinyuetai.com"
API = "https://ext.yinyuetai.com/main/"
ACTION_GET_MV_INFO = "get-h-mv-info"

_URL_PATTERNS = (
    r"https?://v.yinyuetai.com/video/(\d+)(?:\?vid=\d+)?",
    r"https?://v.yinyuetai.com/video/h5/(\d+)(?:\?vid=\d+)?",
    r"https?://m2.yinyuetai.com/video.html\?id=(\d+)",
)


def gen_api(action: str, param: str) -> str:
    """Return the API address for ``action`` with the query ``param``."""
    return f"{API}{action}?json=true&{param}"


def _obj(value: Any) -> dict:
    if not isinstance(value, dict):
        raise URLParseFailedError()
    return value


def _streams(models: list) -> dict[str, Stream]:
    streams: dict[str, Stream] = {}
    for model in models:
        model = _obj(model)
        file_size = int(model.get("fileSize", 0))
        streams[model.get("qualityLevel", "")] = Stream(
            parts=[Part(url=model.get("videoURL", ""), size=file_size, ext="mp4")],
            size=file_size,
            quality=model.get("qualityLevelName", ""),
        )
    return streams


class Extractor(BaseExtractor):
    """Extracts a yinyuetai music video through its API."""

    def extract(self, url: str, option: Options) -> list[Data]:
        vid = match_one_of(url, *_URL_PATTERNS)
        if vid is None or len(vid) < 2:
            raise URLParseFailedError("invalid url for yinyuetai")

        body = request.get(gen_api(ACTION_GET_MV_INFO, f"videoId={vid[1]}"), url, None)
        try:
            document = _obj(json.loads(body))
        except ValueError as exc:
            raise URLParseFailedError() from exc

        if document.get("error"):
            raise RuntimeError(document.get("message", ""))
        core = _obj(_obj(document.get("videoInfo", {})).get("coreVideoInfo", {}))
        if core.get("error"):
            raise RuntimeError(core.get("errorMsg", ""))

        models = core.get("videoURLModels") or []
        if not isinstance(models, list):
            raise URLParseFailedError()
        return [
            Data(
                site=SITE,
                title=core.get("videoName", ""),
                type=DataType.VIDEO,
                streams=_streams(models),
                url=url,
            )
        ]


def new() -> Extractor:
    """Return a yinyuetai extractor."""
    return Extractor()