"""
Scrape-and-summarize pipeline.

Runs fetch -> extract -> summarize sequentially for one URL. Fetch failures
abort the request (or degrade to minimal metadata, depending on policy);
summarization failures fall back to the page description.
"""

import logging
from typing import Callable, Optional

from .config import FETCH_FAILURE_POLICIES
from .errors import ConfigurationError, FetchError, PipelineError, SummarizeError
from .extractor import Extractor, SoupExtractor, minimal_metadata
from .fetcher import fetch_webpage
from .models import SUMMARY_PLACEHOLDER, PipelineResult, WebMetadata
from .summarizer import Summarizer
from .url_utils import normalize_url

logger = logging.getLogger(__name__)


class ScrapePipeline:

    def __init__(
        self,
        fetcher: Callable[[str], str] = fetch_webpage,
        extractor: Extractor = None,
        summarizer: Optional[Summarizer] = None,
        on_fetch_failure: str = 'abort',
    ):
        if on_fetch_failure not in FETCH_FAILURE_POLICIES:
            raise ConfigurationError(
                f"on_fetch_failure must be one of {', '.join(FETCH_FAILURE_POLICIES)}, "
                f"got {on_fetch_failure!r}"
            )
        self.fetcher = fetcher
        self.extractor = extractor or SoupExtractor()
        self.summarizer = summarizer or Summarizer()
        self.on_fetch_failure = on_fetch_failure

    def scrape(self, url: str) -> WebMetadata:
        """
        Normalize, fetch and extract one URL.

        Raises:
            ValidationError: the URL is missing or malformed
            FetchError: the page could not be retrieved
        """
        url = normalize_url(url)
        html = self.fetcher(url)
        return self.extractor.extract(html, url)

    def summarize(self, metadata: WebMetadata, result: PipelineResult) -> str:
        """Summary for extracted metadata; falls back instead of raising."""
        text = metadata.content or metadata.description
        if not text:
            return SUMMARY_PLACEHOLDER

        try:
            return self.summarizer.summarize(text, title=metadata.title, url=metadata.url)
        except (SummarizeError, ConfigurationError) as e:
            logger.warning(
                "summary unavailable, falling back to description",
                extra={'url': metadata.url, 'error': str(e)},
            )
            result.add_error('summarize', str(e))
            return metadata.fallback_summary()

    def scrape_and_summarize(self, url: str) -> PipelineResult:
        """
        Run the whole pipeline for one URL.

        Raises:
            ValidationError: the URL is missing or malformed
            PipelineError: the fetch stage failed under the 'abort' policy
        """
        url = normalize_url(url)

        try:
            html = self.fetcher(url)
        except FetchError as e:
            if self.on_fetch_failure == 'abort':
                raise PipelineError('fetch', str(e)) from e
            logger.warning("fetch failed, returning minimal metadata", extra={'url': url, 'error': str(e)})
            metadata = minimal_metadata(url)
            metadata.summary = metadata.fallback_summary()
            result = PipelineResult(metadata=metadata)
            result.add_error('fetch', str(e))
            return result

        metadata = self.extractor.extract(html, url)
        result = PipelineResult(metadata=metadata)
        metadata.summary = self.summarize(metadata, result)

        logger.info(
            "scrape and summarize complete",
            extra={'url': url, 'errors': len(result.errors)},
        )
        return result
