"""Fallback extractor that downloads a URL as a single file."""

from __future__ import annotations

from vidfetch import request
from vidfetch.models import Data, Extractor as BaseExtractor, Options, Part, Stream
from vidfetch.utils import get_name_and_ext

SITE = "Universal"


class Extractor(BaseExtractor):
    """Treats the URL itself as the only part of the only stream."""

    def extract(self, url: str, option: Options) -> list[Data]:
        filename, ext = get_name_and_ext(url)
        file_size = request.size(url, url)
        stream = Stream(parts=[Part(url=url, size=file_size, ext=ext)], size=file_size)
        media_type = request.content_type(url, url)
        return [
            Data(
                site=SITE,
                title=filename,
                type=media_type,
                streams={"default": stream},
                url=url,
            )
        ]


def new() -> Extractor:
    """Return the universal extractor."""
    return Extractor()