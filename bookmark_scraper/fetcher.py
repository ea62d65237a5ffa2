"""
Page fetching over HTTP.
"""

import logging

import requests
from bs4.dammit import EncodingDetector

from .config import DEFAULT_FETCH_TIMEOUT, DEFAULT_USER_AGENT
from .errors import FetchError

logger = logging.getLogger(__name__)


def fetch_webpage(
    url: str,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
    session: requests.Session = None,
) -> str:
    """
    Fetch a page and return its body as text, whatever the content type.

    The URL must already carry a scheme. One request per call, no retries.
    Bodies are decoded with the header charset, then the page's declared
    charset, then a detected encoding.

    Raises:
        FetchError: on timeout, connection failure or non-2xx status
    """
    headers = {
        'User-Agent': user_agent,
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
        'Accept-Language': 'en-US,en;q=0.5',
    }
    http = session or requests

    logger.info("fetching page", extra={'url': url})
    try:
        response = http.get(url, headers=headers, timeout=timeout, allow_redirects=True)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.warning("fetch timed out", extra={'url': url, 'timeout': timeout})
        raise FetchError('Request timed out') from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else 'unknown'
        logger.warning("fetch returned error status", extra={'url': url, 'status': status})
        raise FetchError(f'HTTP error: {status}') from e
    except requests.exceptions.RequestException as e:
        logger.warning("fetch failed", extra={'url': url, 'error': str(e)})
        raise FetchError(f'Request failed: {str(e)}') from e

    if 'charset' not in response.headers.get('Content-Type', '').lower():
        # No charset header: use the page's <meta charset>, else a detected encoding
        declared = EncodingDetector.find_declared_encoding(response.content, is_html=True)
        response.encoding = declared or response.apparent_encoding

    return response.text
