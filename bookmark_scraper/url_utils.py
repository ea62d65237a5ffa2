"""
URL helpers: scheme normalization, validation, origins and relative link resolution.
"""

import re
from urllib.parse import urlparse

from .errors import ValidationError

_SCHEME_RE = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.\-]*:')


def normalize_url(url: str) -> str:
    """
    Prepend https:// when the URL has no http(s) scheme.

    Raises:
        ValidationError: if the URL is missing or not well-formed afterwards

    Examples:
        >>> normalize_url("example.com")
        'https://example.com'
    """
    if not isinstance(url, str) or not url.strip():
        raise ValidationError('URL is required')

    url = url.strip()
    if not url.lower().startswith(('http://', 'https://')):
        url = 'https://' + url

    if not is_valid_url(url):
        raise ValidationError('Invalid URL format')

    return url


def is_valid_url(url: str) -> bool:
    """True for absolute http(s) URLs with a host and no whitespace."""
    if not isinstance(url, str) or not url or any(c.isspace() for c in url):
        return False
    try:
        parsed = urlparse(url)
        # Accessing .port validates it
        parsed.port
    except ValueError:
        return False
    return parsed.scheme.lower() in ('http', 'https') and bool(parsed.hostname)


def get_origin(url: str) -> str:
    """Return scheme://host[:port] for a URL, or '' if it has no host."""
    try:
        parsed = urlparse(url)
    except (TypeError, ValueError):
        return ''
    if not parsed.scheme or not parsed.netloc:
        return ''
    # Drop user:password@ if present
    host = parsed.netloc.rsplit('@', 1)[-1]
    return f"{parsed.scheme}://{host}"


def resolve_url(candidate: str, base_url: str) -> str:
    """
    Make a link found in a page absolute.

    Candidates starting with "http" are returned as-is; paths are joined to
    the origin of base_url. Anything that cannot be resolved becomes ''.

    Examples:
        >>> resolve_url("/img/a.png", "https://example.com/post/1")
        'https://example.com/img/a.png'

        >>> resolve_url("img/a.png", "https://example.com/post/1")
        'https://example.com/img/a.png'
    """
    if not candidate or not isinstance(candidate, str):
        return ''

    candidate = candidate.strip()
    if not candidate:
        return ''

    if candidate.startswith('http'):
        return candidate

    origin = get_origin(base_url)
    if not origin:
        return ''

    # Protocol-relative: //cdn.example.com/logo.png
    if candidate.startswith('//'):
        return origin.split(':', 1)[0] + ':' + candidate

    # data:, javascript:, mailto: and friends have no absolute http form
    if _SCHEME_RE.match(candidate):
        return ''

    return origin + (candidate if candidate.startswith('/') else '/' + candidate)
