"""Site extractors, each module exposing new() and an Extractor class."""

__all__ = [
    "tangdou",
    "tiktok",
    "tumblr",
    "udn",
    "universal",
    "vimeo",
    "xvideos",
    "yinyuetai",
    "youku",
]