"""HTML helpers."""

from __future__ import annotations

from collections.abc import Callable

from bs4 import BeautifulSoup


def get_doc(html: str) -> BeautifulSoup:
    """Parse an HTML string into a document."""
    return BeautifulSoup(html, "html.parser")


def title(doc: BeautifulSoup) -> str:
    """Return the page title from h1, og:title or the title tag, in that order."""
    heading = doc.find("h1")
    text = heading.get_text().strip().replace("\n", "") if heading is not None else ""
    if not text:
        meta = doc.find("meta", attrs={"property": "og:title"})
        if meta is not None:
            text = meta.get("content", "")
    if not text:
        text = "".join(tag.get_text() for tag in doc.find_all("title"))
    return text


def get_images(
    html: str, img_class: str, url_handler: Callable[[str], str] | None = None
) -> tuple[str, list[str]]:
    """Return the page title and the src of every img whose class is exactly ``img_class``."""
    doc = get_doc(html)
    urls = []
    for img in doc.find_all("img"):
        classes = img.get("class")
        if classes is None or " ".join(classes) != img_class:
            continue
        url = img.get("src", "")
        if url_handler is not None:
            url = url_handler(url)
        urls.append(url)
    return title(doc), urls