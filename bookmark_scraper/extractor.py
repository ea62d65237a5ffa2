"""
HTML metadata extraction.

Pulls title, description, image, favicon and body text out of a fetched
page. Extraction never raises: missing or malformed fields degrade to empty
strings, and the title falls back to the page URL.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Optional

from bs4 import BeautifulSoup

from .models import MAX_CONTENT_LENGTH, WebMetadata
from .url_utils import get_origin, resolve_url

logger = logging.getLogger(__name__)

# Elements that never hold the page's main text
NON_CONTENT_TAGS = ['script', 'style', 'nav', 'footer', 'header', 'aside']


class Extractor(ABC):
    """Turns raw HTML into WebMetadata for a given base URL."""

    @abstractmethod
    def extract(self, html: str, base_url: str) -> WebMetadata:
        """Extract metadata. Implementations must not raise."""
        pass


def _meta_content(soup: BeautifulSoup, **attrs) -> str:
    tag = soup.find('meta', attrs=attrs)
    if not tag:
        return ''
    content = tag.get('content')
    return content.strip() if isinstance(content, str) else ''


def _icon_href(soup: BeautifulSoup) -> str:
    """href of link[rel=icon], else link[rel="shortcut icon"]."""
    links = soup.find_all('link', href=True)
    for wanted in (['icon'], ['shortcut', 'icon']):
        for link in links:
            rel = link.get('rel') or []
            if isinstance(rel, str):
                rel = rel.split()
            if [r.lower() for r in rel] == wanted:
                return link['href'].strip()
    return ''


def extract_title(soup: BeautifulSoup, url: str) -> str:
    title_tag = soup.find('title')
    title = title_tag.get_text(strip=True) if title_tag else ''

    return (
        title or
        _meta_content(soup, property='og:title') or
        _meta_content(soup, name='title') or
        url
    )


def extract_metadata(soup: BeautifulSoup, url: str) -> dict:
    """Extract title, description, image and favicon with absolute links."""
    description = (
        _meta_content(soup, name='description') or
        _meta_content(soup, property='og:description')
    )

    image = (
        _meta_content(soup, property='og:image') or
        _meta_content(soup, name='image')
    )

    favicon_url = resolve_url(_icon_href(soup), url) or default_favicon_url(url)

    return {
        'title': extract_title(soup, url),
        'description': description,
        'image_url': resolve_url(image, url),
        'favicon_url': favicon_url,
    }


def extract_main_content(soup: BeautifulSoup, max_length: int = MAX_CONTENT_LENGTH) -> str:
    """Visible body text with chrome removed. Mutates the soup."""
    for element in soup.find_all(NON_CONTENT_TAGS):
        element.decompose()

    container = soup.find('body') or soup
    text = container.get_text(separator=' ', strip=True)
    text = re.sub(r'\s+', ' ', text).strip()
    return text[:max_length]


class SoupExtractor(Extractor):
    """Structural extractor backed by BeautifulSoup."""

    def __init__(self, parser: str = 'html.parser', max_content_length: int = MAX_CONTENT_LENGTH):
        self.parser = parser
        self.max_content_length = max_content_length

    def extract(self, html: Optional[str], base_url: str) -> WebMetadata:
        try:
            soup = BeautifulSoup(html or '', self.parser)
            # Metadata first: content extraction strips elements from the tree
            fields = extract_metadata(soup, base_url)
            content = extract_main_content(soup, self.max_content_length)
        except Exception as e:
            logger.warning(
                "extraction failed, returning defaults",
                extra={'url': base_url, 'error': str(e)},
            )
            return minimal_metadata(base_url)

        return WebMetadata(url=base_url, content=content, **fields)


def default_favicon_url(url: str) -> str:
    origin = get_origin(url)
    return f"{origin}/favicon.ico" if origin else ''


def minimal_metadata(url: str) -> WebMetadata:
    """Metadata for a page that could not be fetched or parsed: the URL as title, nothing else."""
    return WebMetadata(url=url, title=url)


default_extractor = SoupExtractor()


def extract(html: Optional[str], base_url: str) -> WebMetadata:
    """Extract metadata with the default extractor."""
    return default_extractor.extract(html, base_url)
