"""Merging downloaded parts with ffmpeg."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Sequence


class MergeError(Exception):
    """Raised when ffmpeg fails to merge files."""


def _remove(path: str) -> None:
    try:
        os.remove(path)
    except OSError:
        pass


def _run_merge(args: list[str], paths: Sequence[str], merge_list_path: str = "") -> None:
    try:
        result = subprocess.run(args, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE)
    except OSError as exc:
        raise MergeError(f"{exc}\n") from exc
    if result.returncode != 0:
        stderr = (result.stderr or b"").decode("utf-8", errors="replace")
        raise MergeError(f"exit status {result.returncode}\n{stderr}")

    if merge_list_path:
        _remove(merge_list_path)
    for path in paths:
        _remove(path)


def merge_files_with_same_extension(paths: Sequence[str], merged_file_path: str) -> None:
    """Merge files of the same extension, such as separate audio and video, into one."""
    args = ["ffmpeg", "-y"]
    for path in paths:
        args += ["-i", str(path)]
    args += ["-c:v", "copy", "-c:a", "copy", str(merged_file_path)]
    _run_merge(args, paths)


def merge_to_mp4(paths: Sequence[str], merged_file_path: str, filename: str) -> None:
    """Concatenate video parts into an MP4 file."""
    merge_list_path = f"{filename}.txt"
    with open(merge_list_path, "w", encoding="utf-8") as merge_list:
        for path in paths:
            merge_list.write(f"file '{path}'\n")

    args = [
        "ffmpeg", "-y", "-f", "concat", "-safe", "0",
        "-i", merge_list_path, "-c", "copy", "-bsf:a", "aac_adtstoasc", str(merged_file_path),
    ]
    _run_merge(args, paths, merge_list_path)