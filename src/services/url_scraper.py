"""Link preview: fetch a page and pull out its title, description, image and favicon."""
import ipaddress
import logging
import socket
from urllib.parse import urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

from schemas.bookmark import BookmarkPreview

logger = logging.getLogger(__name__)

USER_AGENT = 'Mozilla/5.0 (compatible; Xync/1.0)'
DEFAULT_TIMEOUT = 10.0


class SSRFBlockedError(Exception):
    """Raised when a URL targets a private/internal network address."""

    pass


def is_private_ip(ip_str: str) -> bool:
    """
    Check if an IP address is private, loopback, or otherwise internal.

    Unparseable addresses count as private.
    """
    try:
        ip = ipaddress.ip_address(ip_str)
    except ValueError:
        return True
    return (
        ip.is_private
        or ip.is_loopback
        or ip.is_link_local
        or ip.is_multicast
        or ip.is_reserved
        or ip.is_unspecified
    )


def validate_url_not_private(url: str) -> None:
    """
    Validate that a URL does not target a private/internal network.

    The hostname is resolved so a public name pointing at an internal address is
    caught too.

    Raises:
        SSRFBlockedError: If the URL targets a private network.
        ValueError: If the URL has no hostname or the hostname does not resolve.
    """
    hostname = urlparse(url).hostname
    if not hostname:
        raise ValueError(f"Invalid URL (no hostname): {url}")

    if hostname.lower() in ('localhost', 'localhost.localdomain'):
        raise SSRFBlockedError(f"Blocked request to localhost: {url}")

    try:
        addrinfo = socket.getaddrinfo(hostname, None, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except socket.gaierror as e:
        raise ValueError(f"Could not resolve hostname: {hostname}") from e

    for _, _, _, _, sockaddr in addrinfo:
        if is_private_ip(sockaddr[0]):
            raise SSRFBlockedError(
                f"Blocked request to private/internal address: {url} resolves to {sockaddr[0]}",
            )


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str | None:
    tag = soup.find('meta', attrs=attrs)
    if tag and tag.get('content'):
        content = tag['content'].strip()
        return content or None
    return None


def favicon_url(url: str) -> str | None:
    """Conventional favicon location for the URL's origin."""
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.hostname:
        return None
    return f"{parsed.scheme}://{parsed.netloc}/favicon.ico"


def extract_preview(html: str, base_url: str) -> BookmarkPreview:
    """
    Extract preview metadata from HTML.

    Pure function with no I/O.

    Title: og:title, then <title>.
    Description: og:description, then <meta name="description">.
    Image: og:image, resolved against base_url.
    Favicon: always scheme://host/favicon.ico of base_url.
    """
    soup = BeautifulSoup(html, 'lxml')

    title = _meta_content(soup, property='og:title')
    if not title:
        title_tag = soup.find('title')
        if title_tag and title_tag.string and title_tag.string.strip():
            title = title_tag.string.strip()

    description = (
        _meta_content(soup, property='og:description')
        or _meta_content(soup, name='description')
    )

    image = _meta_content(soup, property='og:image')
    if image:
        image = urljoin(base_url, image)

    return BookmarkPreview(
        title=title,
        description=description,
        image=image,
        favicon=favicon_url(base_url),
    )


async def fetch_preview(url: str, timeout: float = DEFAULT_TIMEOUT) -> BookmarkPreview:  # noqa: ASYNC109
    """
    Fetch a page and build its preview.

    Best-effort: blocked addresses, network errors, non-2xx responses and
    non-HTML bodies all return an empty preview rather than raising.
    """
    try:
        validate_url_not_private(url)
    except (SSRFBlockedError, ValueError) as e:
        logger.info("Preview blocked for %s: %s", url, e)
        return BookmarkPreview()

    try:
        async with httpx.AsyncClient(
            follow_redirects=True,
            timeout=timeout,
            headers={'User-Agent': USER_AGENT},
            http2=True,
        ) as client:
            response = await client.get(url)
    except httpx.TimeoutException:
        logger.info("Preview timed out for %s", url)
        return BookmarkPreview()
    except httpx.RequestError as e:
        logger.info("Preview request failed for %s: %s", url, e)
        return BookmarkPreview()

    final_url = str(response.url)
    try:
        validate_url_not_private(final_url)
    except (SSRFBlockedError, ValueError) as e:
        logger.info("Preview redirect blocked for %s: %s", url, e)
        return BookmarkPreview()

    if not response.is_success:
        logger.info("Preview for %s returned HTTP %s", url, response.status_code)
        return BookmarkPreview()

    content_type = response.headers.get('content-type', '')
    if 'text/html' not in content_type.lower():
        return BookmarkPreview()

    return extract_preview(response.text, final_url)
