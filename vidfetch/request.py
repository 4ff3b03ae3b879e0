"""HTTP helpers with shared options, retries and cookie handling."""

from __future__ import annotations

import itertools
import time
import warnings
from dataclasses import dataclass, field

import requests
from requests.structures import CaseInsensitiveDict

DEFAULT_HEADERS: dict[str, str] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.8",
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/90.0 Safari/537.36"
    ),
}

_TIMEOUT = (10, 15 * 60)
_BLUE = "\033[34m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_RESET = "\033[0m"


class RequestError(Exception):
    """Raised when a request fails after all retries."""


@dataclass(frozen=True)
class RequestOptions:
    """Options shared by every request."""

    retry_times: int = 0
    cookie: str = ""
    refer: str = ""
    debug: bool = False
    silent: bool = False


@dataclass
class _Settings:
    options: RequestOptions = field(default_factory=RequestOptions)


_settings = _Settings()


def set_options(options: RequestOptions) -> None:
    """Set the options used by all later requests."""
    _settings.options = options


def _parse_cookie_file(raw: str) -> list[tuple[str, str]]:
    """Parse Netscape cookie-file text; an empty list means it is not one."""
    cookies = []
    for line in raw.splitlines():
        line = line.strip()
        if line.startswith("#HttpOnly_"):
            line = line[len("#HttpOnly_"):]
        elif not line or line.startswith("#"):
            continue
        fields = line.split("\t")
        if len(fields) != 7:
            return []
        cookies.append((fields[5], fields[6]))
    return cookies


def _cookie_header(raw: str) -> str:
    cookies = _parse_cookie_file(raw)
    if not cookies:
        return raw
    return "; ".join(f"{name}={value}" for name, value in cookies)


def _print_debug(url: str, method: str, response: requests.Response) -> None:
    print()
    print(f"{_BLUE}URL:         {_RESET}{url}")
    print(f"{_BLUE}Method:      {_RESET}{method}")
    print(f"{_BLUE}Headers:     {_RESET}{dict(response.request.headers)}")
    colour = _RED if response.status_code >= 400 else _GREEN
    print(f"{_BLUE}Status Code: {_RESET}{colour}{response.status_code}{_RESET}")


def request(method: str, url: str, body=None, headers: dict[str, str] | None = None) -> requests.Response:
    """Send a request, retrying on failure; the caller closes the response."""
    options = _settings.options
    headers = headers or {}
    send_headers = dict(DEFAULT_HEADERS)
    send_headers.update(headers)
    if "Referer" not in headers:
        send_headers["Referer"] = url
    if options.cookie:
        send_headers["Cookie"] = _cookie_header(options.cookie)
    if options.refer:
        send_headers["Referer"] = options.refer

    for attempt in itertools.count(1):
        response = None
        failure = None
        try:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore")
                response = requests.request(
                    method,
                    url,
                    data=body,
                    headers=send_headers,
                    timeout=_TIMEOUT,
                    verify=False,
                    stream=True,
                )
        except requests.RequestException as exc:
            failure = exc
        if response is not None and response.status_code < 400:
            break
        if attempt >= options.retry_times:
            if failure is not None:
                raise RequestError(f"request error: {failure}") from failure
            response.close()
            raise RequestError(f"{url} request error: HTTP {response.status_code}")
        if response is not None:
            response.close()
        time.sleep(1)

    if options.debug:
        _print_debug(url, method, response)
    return response


def get_bytes(url: str, refer: str = "", headers: dict[str, str] | None = None) -> bytes:
    """GET ``url`` and return the decoded body bytes."""
    headers = dict(headers or {})
    if refer:
        headers["Referer"] = refer
    with request("GET", url, None, headers) as response:
        return response.content


def get(url: str, refer: str = "", headers: dict[str, str] | None = None) -> str:
    """GET ``url`` and return the body as text."""
    return get_bytes(url, refer, headers).decode("utf-8", errors="replace")


def headers(url: str, refer: str = "") -> CaseInsensitiveDict:
    """Return the response headers of ``url``."""
    with request("GET", url, None, {"Referer": refer}) as response:
        return response.headers


def size(url: str, refer: str = "") -> int:
    """Return the Content-Length of ``url``."""
    value = headers(url, refer).get("Content-Length", "")
    if not value:
        raise RequestError("Content-Length is not present")
    try:
        return int(value)
    except ValueError as exc:
        raise RequestError(f"invalid Content-Length: {value!r}") from exc


def content_type(url: str, refer: str = "") -> str:
    """Return the media type of ``url`` without parameters."""
    return headers(url, refer).get("Content-Type", "").split(";")[0]