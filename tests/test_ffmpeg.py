import subprocess
from unittest import mock

import pytest

from vidfetch.ffmpeg import MergeError, merge_files_with_same_extension, merge_to_mp4


def _make_parts(tmp_path, count):
    parts = []
    for number in range(count):
        part = tmp_path / f"part{number}.ts"
        part.write_bytes(b"data")
        parts.append(str(part))
    return parts


def _success(args, **kwargs):
    return subprocess.CompletedProcess(args, 0, stderr=b"")


def test_merge_same_extension_command_and_cleanup(tmp_path):
    parts = _make_parts(tmp_path, 2)
    merged = str(tmp_path / "out.mp4")
    with mock.patch("vidfetch.ffmpeg.subprocess.run", side_effect=_success) as run:
        merge_files_with_same_extension(parts, merged)
    args = run.call_args.args[0]
    assert args == [
        "ffmpeg", "-y", "-i", parts[0], "-i", parts[1],
        "-c:v", "copy", "-c:a", "copy", merged,
    ]
    assert not any((tmp_path / f"part{n}.ts").exists() for n in range(2))


def test_merge_same_extension_failure_keeps_parts(tmp_path):
    parts = _make_parts(tmp_path, 2)
    failed = subprocess.CompletedProcess([], 1, stderr=b"boom")
    with mock.patch("vidfetch.ffmpeg.subprocess.run", return_value=failed):
        with pytest.raises(MergeError, match="boom"):
            merge_files_with_same_extension(parts, str(tmp_path / "out.mp4"))
    assert all((tmp_path / f"part{n}.ts").exists() for n in range(2))


def test_merge_missing_executable(tmp_path):
    parts = _make_parts(tmp_path, 1)
    with mock.patch("vidfetch.ffmpeg.subprocess.run", side_effect=FileNotFoundError("ffmpeg")):
        with pytest.raises(MergeError):
            merge_files_with_same_extension(parts, str(tmp_path / "out.mp4"))
    assert (tmp_path / "part0.ts").exists()


def test_merge_to_mp4_writes_list_and_cleans_up(tmp_path):
    parts = _make_parts(tmp_path, 3)
    merged = str(tmp_path / "video.mp4")
    name = str(tmp_path / "video")
    seen = {}

    def run(args, **kwargs):
        with open(f"{name}.txt", encoding="utf-8") as merge_list:
            seen["list"] = merge_list.read()
        seen["args"] = args
        return subprocess.CompletedProcess(args, 0, stderr=b"")

    with mock.patch("vidfetch.ffmpeg.subprocess.run", side_effect=run):
        merge_to_mp4(parts, merged, name)

    assert seen["list"] == "".join(f"file '{part}'\n" for part in parts)
    assert seen["args"] == [
        "ffmpeg", "-y", "-f", "concat", "-safe", "0",
        "-i", f"{name}.txt", "-c", "copy", "-bsf:a", "aac_adtstoasc", merged,
    ]
    assert not (tmp_path / "video.txt").exists()
    assert not any((tmp_path / f"part{n}.ts").exists() for n in range(3))


def test_merge_to_mp4_failure_keeps_list(tmp_path):
    parts = _make_parts(tmp_path, 1)
    name = str(tmp_path / "video")
    failed = subprocess.CompletedProcess([], 2, stderr=b"bad input")
    with mock.patch("vidfetch.ffmpeg.subprocess.run", return_value=failed):
        with pytest.raises(MergeError, match="bad input"):
            merge_to_mp4(parts, str(tmp_path / "video.mp4"), name)
    assert (tmp_path / "video.txt").exists()
    assert (tmp_path / "part0.ts").exists()