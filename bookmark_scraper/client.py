"""
Client for the deployed scrape/summarize Cloud Functions.

This is what the app calls; the functions themselves live in
scrape-functions/main.py.
"""

import logging
from typing import Optional

import requests

from .config import get_functions_base_url
from .errors import FunctionsClientError

logger = logging.getLogger(__name__)


class FunctionsClient:

    def __init__(self, base_url: str = None, timeout: float = 30, session: requests.Session = None):
        self.base_url = (base_url or get_functions_base_url()).rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, endpoint: str, payload: dict, default_error: str) -> dict:
        url = f"{self.base_url}/{endpoint}"
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("functions call failed", extra={'endpoint': endpoint, 'error': str(e)})
            raise FunctionsClientError(f'{default_error}: {str(e)}') from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not response.ok:
            message = data.get('error')
            logger.error(
                "functions call returned error",
                extra={'endpoint': endpoint, 'status': response.status_code, 'error': message},
            )
            raise FunctionsClientError(message or default_error, status_code=response.status_code)

        return data.get('data') or {}

    def scrape_website(self, url: str) -> dict:
        """Title, description, imageUrl, faviconUrl, content and url for a page."""
        return self._post('scrapeWebsite', {'url': url}, 'Failed to scrape website')

    def summarize_content(self, content: str, url: Optional[str] = None, title: Optional[str] = None) -> str:
        data = self._post(
            'summarizeContent',
            {'content': content, 'url': url, 'title': title},
            'Failed to summarize content',
        )
        return data.get('summary', '')

    def scrape_and_summarize(self, url: str) -> dict:
        return self._post('scrapeAndSummarize', {'url': url}, 'Failed to scrape and summarize')
