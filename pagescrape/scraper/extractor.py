"""Content extraction: turns a :class:`RawPage` into a :class:`ScrapeResult`.

Title and ``<meta>`` description/keywords always come from the whole document.
Headings, paragraphs, links and images come only from the descendants of the
*root* node-set: the elements matched by the request selector, or ``<body>``
when no selector is given.
"""

from __future__ import annotations

import re
from typing import List, Optional
from urllib.parse import quote, urljoin, urlsplit

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from pagescrape.config import Settings, settings as default_settings
from pagescrape.scraper.errors import ScrapeError, ScrapeErrorKind
from pagescrape.scraper.models import Image, Link, PageMetadata, RawPage, ScrapeResult

SELECTOR_NOT_FOUND_MESSAGE = "Selector not found on page"

_HEADINGS = "h1, h2, h3, h4, h5, h6"
_PARAGRAPHS = "p"
_LINKS = "a[href]"
_IMAGES = "img[src]"

# Schemes whose URLs are meaningless without a host.
_HOST_SCHEMES = {"http", "https", "ftp", "ws", "wss"}
_STRIPPED_URL_CHARS = re.compile(r"[\t\n\r]")
# A leading ``xxx:`` before any ``/``, ``?`` or ``#``: either a scheme or garbage.
_SCHEME_PREFIX = re.compile(r"^([^/?#]*?):")
_VALID_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
# Reserved characters plus ``%`` so existing escapes survive quoting.
_URL_SAFE_CHARS = "!#$%&'()*+,/:;=?@[]~"
_FORBIDDEN_HOST_CHARS = re.compile(r"[\x00-\x20%<>^|\\\x7f]")


# ---------------------------------------------------------------------------
# URL resolution
# ---------------------------------------------------------------------------

def is_valid_host(host: str) -> bool:
    """Return ``False`` for hosts no resolver can accept.

    Rejects forbidden host code points (``%<>^|\\``, spaces, controls) and
    empty DNS labels such as ``a..b``.  A single trailing dot is allowed;
    IPv6 literals (containing ``:``) skip the label check.
    """
    if not host or _FORBIDDEN_HOST_CHARS.search(host):
        return False
    if ":" in host:
        return True
    labels = (host[:-1] if host.endswith(".") else host).split(".")
    return all(labels)


def resolve_url(base: str, ref: str) -> str:
    """Resolve *ref* against *base*, or return *ref* unchanged if that fails.

    Tabs and newlines are dropped and other unsafe characters (spaces,
    non-ASCII) are percent-encoded before joining, so ``annual report.pdf``
    resolves to ``.../annual%20report.pdf``.  Resolution fails when *ref*
    starts with a scheme-like ``xxx:`` prefix that is not a valid scheme, the
    joined result does not parse (bad port, broken IPv6 literal), or its host
    is missing for a host-based scheme or fails :func:`is_valid_host`.
    Never raises.
    """
    cleaned = _STRIPPED_URL_CHARS.sub("", ref.strip())
    prefix = _SCHEME_PREFIX.match(cleaned)
    if prefix and not _VALID_SCHEME.fullmatch(prefix.group(1)):
        return ref
    try:
        resolved = urljoin(base, quote(cleaned, safe=_URL_SAFE_CHARS))
        parts = urlsplit(resolved)
        parts.port  # noqa: B018 - raises ValueError on a malformed port
    except ValueError:
        return ref
    if not parts.scheme:
        return ref
    if parts.scheme in _HOST_SCHEMES and not parts.hostname:
        return ref
    if parts.hostname and not is_valid_host(parts.hostname):
        return ref
    return resolved


# ---------------------------------------------------------------------------
# Parsing and scoping
# ---------------------------------------------------------------------------

def parse_html(html: str, parser: str = "html.parser") -> BeautifulSoup:
    """Parse *html* leniently; malformed markup yields a best-effort tree."""
    return BeautifulSoup(html, parser)


def select_root(soup: BeautifulSoup, selector: str = "") -> List[Tag]:
    """Return the root node-set that scoped extraction runs under.

    Raises:
        ScrapeError: ``InvalidInput`` for unparsable CSS, ``SelectorNotFound``
            when *selector* matches nothing.
    """
    if not selector:
        return [soup.body or soup]
    try:
        matches = soup.select(selector)
    except SelectorSyntaxError as exc:
        first_line = str(exc).strip().splitlines()[0] if str(exc).strip() else selector
        raise ScrapeError(
            ScrapeErrorKind.INVALID_INPUT, f"Invalid CSS selector: {first_line}"
        ) from exc
    if not matches:
        raise ScrapeError(ScrapeErrorKind.SELECTOR_NOT_FOUND, SELECTOR_NOT_FOUND_MESSAGE)
    return list(matches)


def _scoped(soup: BeautifulSoup, roots: List[Tag], css: str) -> List[Tag]:
    """Elements matching *css* below any of *roots*, once each, in document order.

    The document is matched once and each candidate's ancestors are checked
    against the root set, so nested or overlapping roots cost nothing extra.
    """
    root_ids = {id(root) for root in roots}
    return [
        el for el in soup.select(css)
        if any(id(parent) in root_ids for parent in el.parents)
    ]


def _text(el: Tag) -> str:
    return el.get_text().strip()


def _attr(el: Tag, name: str) -> str:
    value = el.get(name)
    return value if isinstance(value, str) else ""


# ---------------------------------------------------------------------------
# Whole-document fields
# ---------------------------------------------------------------------------

def extract_title(soup: BeautifulSoup) -> str:
    """Return the trimmed text of the first ``<title>`` tag, or empty string."""
    title = soup.find("title")
    return _text(title) if title is not None else ""


def extract_metadata(soup: BeautifulSoup) -> PageMetadata:
    def meta(name: str) -> str:
        tag = soup.select_one(f'meta[name="{name}"]')
        return _attr(tag, "content").strip() if tag is not None else ""

    return PageMetadata(description=meta("description"), keywords=meta("keywords"))


# ---------------------------------------------------------------------------
# Scoped fields
# ---------------------------------------------------------------------------

def extract_headings(soup: BeautifulSoup, roots: List[Tag]) -> List[str]:
    texts = (_text(el) for el in _scoped(soup, roots, _HEADINGS))
    return [text for text in texts if text]


def extract_paragraphs(
    soup: BeautifulSoup, roots: List[Tag], min_length: int = 20
) -> List[str]:
    """Paragraph texts strictly longer than *min_length* characters."""
    texts = (_text(el) for el in _scoped(soup, roots, _PARAGRAPHS))
    return [text for text in texts if len(text) > min_length]


def extract_links(soup: BeautifulSoup, roots: List[Tag], base_url: str) -> List[Link]:
    """Anchors with a non-empty ``href``, resolved to absolute form where possible."""
    links: List[Link] = []
    for el in _scoped(soup, roots, _LINKS):
        href = _attr(el, "href")
        if href:
            links.append(Link(text=_text(el), href=resolve_url(base_url, href)))
    return links


def extract_images(soup: BeautifulSoup, roots: List[Tag], base_url: str) -> List[Image]:
    images: List[Image] = []
    for el in _scoped(soup, roots, _IMAGES):
        src = _attr(el, "src")
        if src:
            images.append(Image(alt=_attr(el, "alt").strip(), src=resolve_url(base_url, src)))
    return images


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_content(
    raw: RawPage, selector: str = "", settings: Optional[Settings] = None
) -> ScrapeResult:
    """Extract a :class:`ScrapeResult` from *raw*.

    Relative ``href``/``src`` values are resolved against ``raw.url``.  The
    selector is evaluated before any scoped field is computed, so a miss
    raises without doing further work.

    Raises:
        ScrapeError: see :func:`select_root`.
    """
    cfg = settings or default_settings
    soup = parse_html(raw.html, cfg.html_parser)
    roots = select_root(soup, selector)

    return ScrapeResult(
        title=extract_title(soup),
        headings=extract_headings(soup, roots),
        paragraphs=extract_paragraphs(soup, roots, cfg.min_paragraph_length),
        links=extract_links(soup, roots, raw.url),
        images=extract_images(soup, roots, raw.url),
        metadata=extract_metadata(soup),
    )
