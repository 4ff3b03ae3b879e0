"""Stream information extraction for video and image sites, with HTTP, HTML and ffmpeg helpers."""

__version__ = "0.11.0"