"""Public profile link normalisation.

Links are only checked for shape; nothing here touches the network.
"""

from __future__ import annotations

import ipaddress
from urllib.parse import urlparse

LINK_LABELS = {
    "github": "GitHub",
    "linkedin": "LinkedIn",
    "portfolio": "Portfolio",
    "website": "Website",
}

_BLOCKED_HOSTNAMES = {"localhost", "localhost.localdomain"}


class InvalidLinkError(ValueError):
    """Raised when a link cannot be turned into a public http(s) URL."""


def normalize_link(url: str) -> str:
    """Return an absolute http(s) URL for a user-entered link.

    Bare hosts (``github.com/ada``) get an ``https://`` scheme.
    Raises InvalidLinkError for other schemes, missing hosts, or
    loopback/private addresses.
    """
    url = (url or "").strip()
    if not url:
        raise InvalidLinkError("Empty link")
    if "://" not in url:
        url = f"https://{url}"

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise InvalidLinkError(f"Unsupported URL scheme: {parsed.scheme!r}")

    hostname = parsed.hostname
    if not hostname:
        raise InvalidLinkError(f"No hostname in URL: {url!r}")
    if hostname.lower() in _BLOCKED_HOSTNAMES:
        raise InvalidLinkError(f"Not a public hostname: {hostname!r}")

    try:
        addr = ipaddress.ip_address(hostname)
    except ValueError:
        if "." not in hostname:
            raise InvalidLinkError(f"Not a public hostname: {hostname!r}") from None
        return url
    if addr.is_private or addr.is_loopback or addr.is_reserved or addr.is_link_local:
        raise InvalidLinkError(f"Not a public address: {addr}")
    return url


def safe_href(url: str) -> str | None:
    """Normalised link for an ``href``, or None when the link is unusable."""
    try:
        return normalize_link(url)
    except InvalidLinkError:
        return None
