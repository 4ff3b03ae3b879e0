import io

import pytest
import requests
import responses

from vidfetch import request
from vidfetch.request import RequestError, RequestOptions
from vidfetch.utils import (
    domain,
    file_line_counter,
    file_name,
    file_path,
    file_size,
    get_name_and_ext,
    get_string_from_json,
    item_in_slice,
    limit_length,
    m3u8_urls,
    match_all,
    match_one_of,
    md5,
    parse_input_file,
    reverse,
)

TWELVE_LINES = "".join(f"line {number}\n" for number in range(1, 13))


@pytest.fixture(autouse=True)
def _reset_request_options():
    request.set_options(RequestOptions())
    yield
    request.set_options(RequestOptions())


@pytest.mark.parametrize(
    ("text", "path", "expected"),
    [
        ('{"name":{"first":"Janet","last":"Prichard"},"age":47}', "name.first", "Janet"),
        ('{"children": ["Sara","Alex","Jack"]}', "children.1", "Alex"),
    ],
)
def test_get_string_from_json(text, path, expected):
    assert get_string_from_json(text, path) == expected


def test_get_string_from_json_number_and_missing():
    document = '{"name":{"first":"Janet"},"age":47,"tags":["a","b"]}'
    assert get_string_from_json(document, "age") == "47"
    assert get_string_from_json(document, "tags.#") == "2"
    assert get_string_from_json(document, "name.middle") == ""
    assert get_string_from_json("not json", "age") == ""


def test_match_one_of_second_pattern():
    assert match_one_of("hello12345", r"aaa(\d+)", r"hello(\d+)") == ["hello12345", "12345"]


def test_match_one_of_none():
    assert match_one_of("hello12345", r"aaa(\d+)", r"bbb(\d+)") is None


def test_match_all():
    assert match_all("hello12345hello123", r"hello(\d+)") == [
        ["hello12345", "12345"],
        ["hello123", "123"],
    ]


def test_file_size_missing(tmp_path):
    assert file_size(tmp_path / "hello") == (0, False)


def test_file_size_existing(tmp_path):
    target = tmp_path / "data.bin"
    target.write_bytes(b"abcde")
    assert file_size(target) == (5, True)


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("http://www.aa.com", "aa"),
        ("https://aa.com", "aa"),
        ("aa.cn", "aa"),
        ("www.aa.cn", "aa"),
        ("http://www.aa.com.cn", "aa"),
        ("http://aa", ""),
    ],
)
def test_domain(url, expected):
    assert domain(url) == expected


@pytest.mark.parametrize(
    ("text", "length", "expected"),
    [
        ("你好 hello", 8, "你好 hello"),
        ("你好 hello", 6, "你好 ..."),
        ("你好 hello", 0, "你好 hello"),
    ],
)
def test_limit_length(text, length, expected):
    assert limit_length(text, length) == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("hello/world", "hello world"),
        ("hello:world", "hello：world"),
        ("super " + "超级长" * 25, "super " + "超级长" * 23 + "超级..."),
    ],
)
def test_file_name(name, expected):
    assert file_name(name, "", 80) == expected


def test_file_name_with_ext_and_colon_space():
    assert file_name("a: b|c", "mp4", 0) == "a：b-c.mp4"


@pytest.mark.parametrize(
    ("name", "ext", "escape", "expected"),
    [
        ("hello", "txt", False, "hello.txt"),
        ("hello:world", "txt", True, "hello：world.txt"),
    ],
)
def test_file_path(name, ext, escape, expected):
    assert file_path(name, ext, 80, "", escape) == expected


def test_file_path_in_directory(tmp_path):
    assert file_path("hello", "txt", 80, str(tmp_path), False) == str(tmp_path / "hello.txt")


def test_file_path_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        file_path("hello", "txt", 80, str(tmp_path / "missing"), False)


@pytest.mark.parametrize(
    ("item", "items", "expected"),
    [
        (1, [1, 2], True),
        (1, [2, 3], False),
        ("hello", ["2", "hello"], True),
        (3, ["2", "3"], False),
    ],
)
def test_item_in_slice(item, items, expected):
    assert item_in_slice(item, items) is expected


def test_get_name_and_ext_from_path():
    uri = "https://img9.bcyimg.com/drawer/15294/post/1799t/1f5a87801a0711e898b12b640777720f.jpg"
    assert get_name_and_ext(uri) == ("1f5a87801a0711e898b12b640777720f", "jpg")


def test_get_name_and_ext_from_content_type():
    uri = "https://img9.bcyimg.com/drawer/15294/post/1799t/1f5a87801a0711e898b12b640777720f.jpg/w650"
    with responses.RequestsMock() as mock:
        mock.add(responses.GET, uri, body=b"", content_type="image/jpeg")
        assert get_name_and_ext(uri) == ("w650", "jpeg")


def test_get_name_and_ext_request_failure():
    with responses.RequestsMock() as mock:
        mock.add(responses.GET, "https://a.com/a", body=requests.ConnectionError("down"))
        with pytest.raises(RequestError):
            get_name_and_ext("https://a.com/a")


def test_get_name_and_ext_invalid_uri():
    with pytest.raises(ValueError):
        get_name_and_ext("test")


def test_md5():
    assert md5("123456") == "e10adc3949ba59abbe56e057f20f883e"


def test_reverse():
    assert reverse("123456") == "654321"


def test_reverse_twice_is_identity():
    assert reverse(reverse("你好 hello")) == "你好 hello"


def test_file_line_counter_text():
    assert file_line_counter(io.StringIO(TWELVE_LINES)) == 12


def test_file_line_counter_bytes():
    assert file_line_counter(io.BytesIO(b"a\nb\nc")) == 2


@pytest.mark.parametrize(
    ("items", "start", "end", "expected"),
    [
        ("", 2, 4, 3),
        ("", 0, 4, 4),
        ("", 2, 1, 1),
        ("1-2, 5, 6, 8", 0, 0, 5),
    ],
)
def test_parse_input_file_counts(items, start, end, expected):
    assert len(parse_input_file(io.StringIO(TWELVE_LINES), items, start, end)) == expected


def test_parse_input_file_empty():
    assert parse_input_file(io.StringIO(""), "", 0, 0) == []


def test_parse_input_file_start_to_end():
    got = parse_input_file(io.StringIO(TWELVE_LINES), "", 5, 0)
    assert got == [f"line {number}" for number in range(5, 13)]


def test_parse_input_file_strips_lines():
    got = parse_input_file(io.BytesIO(b"  one  \r\ntwo\n"), "", 0, 0)
    assert got == ["one", "two"]


def test_m3u8_urls():
    uri = "https://example.com/live/index.m3u8"
    body = "#EXTM3U\n#EXTINF:10,\nseg1.ts\n\nhttp://cdn.example.com/seg2.ts\n"
    with responses.RequestsMock() as mock:
        mock.add(responses.GET, uri, body=body)
        assert m3u8_urls(uri) == [
            "https://example.com/live/seg1.ts",
            "http://cdn.example.com/seg2.ts",
        ]


def test_m3u8_urls_empty_uri():
    with pytest.raises(ValueError, match="url is null"):
        m3u8_urls("")