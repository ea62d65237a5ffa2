"""
Unit tests for the scrape-and-summarize pipeline.

Stages are replaced with in-memory fakes.
"""

import pytest

from bookmark_scraper.errors import (
    ConfigurationError,
    FetchError,
    PipelineError,
    SummarizeError,
    ValidationError,
)
from bookmark_scraper.models import SUMMARY_FIELDS, SUMMARY_PLACEHOLDER
from bookmark_scraper.pipeline import ScrapePipeline

ARTICLE_HTML = (
    '<html><head><title>Test Page</title>'
    '<meta name="description" content="A test."></head>'
    '<body>Hello world content...</body></html>'
)


class FakeFetcher:
    def __init__(self, html=ARTICLE_HTML, error=None):
        self.html = html
        self.error = error
        self.calls = []

    def __call__(self, url):
        self.calls.append(url)
        if self.error:
            raise self.error
        return self.html


class FakeSummarizer:
    def __init__(self, summary="สรุป", error=None):
        self.summary = summary
        self.error = error
        self.calls = []

    def summarize(self, content, title=None, url=None):
        self.calls.append({'content': content, 'title': title, 'url': url})
        if self.error:
            raise self.error
        return self.summary


class TestScrapeAndSummarize:
    """Tests for ScrapePipeline.scrape_and_summarize()"""

    def test_success(self):
        summarizer = FakeSummarizer()
        pipeline = ScrapePipeline(fetcher=FakeFetcher(), summarizer=summarizer)

        result = pipeline.scrape_and_summarize("https://example.com")

        assert result.ok
        assert result.metadata.summary == "สรุป"
        assert result.to_dict() == {
            'title': 'Test Page',
            'description': 'A test.',
            'imageUrl': '',
            'faviconUrl': 'https://example.com/favicon.ico',
            'summary': 'สรุป',
            'url': 'https://example.com',
        }
        assert tuple(result.to_dict()) == SUMMARY_FIELDS
        assert summarizer.calls == [{
            'content': 'Hello world content...',
            'title': 'Test Page',
            'url': 'https://example.com',
        }]

    def test_missing_protocol_normalized_before_fetch(self):
        fetcher = FakeFetcher()
        pipeline = ScrapePipeline(fetcher=fetcher, summarizer=FakeSummarizer())

        result = pipeline.scrape_and_summarize("example.com")

        assert fetcher.calls == ["https://example.com"]
        assert result.metadata.url == "https://example.com"

    def test_invalid_url_rejected_without_fetch(self):
        fetcher = FakeFetcher()
        pipeline = ScrapePipeline(fetcher=fetcher, summarizer=FakeSummarizer())

        with pytest.raises(ValidationError):
            pipeline.scrape_and_summarize("https://exa mple.com")
        assert fetcher.calls == []

    def test_fetch_failure_aborts_by_default(self):
        cause = FetchError("HTTP error: 404")
        pipeline = ScrapePipeline(fetcher=FakeFetcher(error=cause), summarizer=FakeSummarizer())

        with pytest.raises(PipelineError) as exc_info:
            pipeline.scrape_and_summarize("https://example.com")

        assert exc_info.value.stage == 'fetch'
        assert "404" in exc_info.value.message
        assert exc_info.value.__cause__ is cause

    def test_fetch_failure_degrades_when_configured(self):
        summarizer = FakeSummarizer()
        pipeline = ScrapePipeline(
            fetcher=FakeFetcher(error=FetchError("Request timed out")),
            summarizer=summarizer,
            on_fetch_failure='degrade',
        )

        result = pipeline.scrape_and_summarize("example.com/slow")

        assert result.metadata.title == "https://example.com/slow"
        assert result.metadata.description == ""
        assert result.metadata.image_url == ""
        assert result.metadata.favicon_url == ""
        assert result.metadata.summary == SUMMARY_PLACEHOLDER
        assert result.errors == [{'stage': 'fetch', 'message': 'Request timed out', 'recoverable': True}]
        assert summarizer.calls == []

    def test_summarize_failure_falls_back_to_description(self):
        pipeline = ScrapePipeline(
            fetcher=FakeFetcher(),
            summarizer=FakeSummarizer(error=SummarizeError("503 Service Unavailable")),
        )

        result = pipeline.scrape_and_summarize("https://example.com")

        assert result.metadata.summary == "A test."
        assert not result.ok
        assert result.errors[0]['stage'] == 'summarize'
        assert result.errors[0]['recoverable'] is True

    def test_missing_api_key_falls_back(self):
        pipeline = ScrapePipeline(
            fetcher=FakeFetcher(),
            summarizer=FakeSummarizer(error=ConfigurationError("GEMINI_API_KEY not configured")),
        )

        result = pipeline.scrape_and_summarize("https://example.com")

        assert result.metadata.summary == "A test."
        assert "GEMINI_API_KEY" in result.errors[0]['message']

    def test_summarize_failure_without_description_uses_placeholder(self):
        html = '<html><head><title>T</title></head><body>Body text</body></html>'
        pipeline = ScrapePipeline(
            fetcher=FakeFetcher(html=html),
            summarizer=FakeSummarizer(error=SummarizeError("boom")),
        )

        result = pipeline.scrape_and_summarize("https://example.com")
        assert result.metadata.summary == SUMMARY_PLACEHOLDER

    def test_description_summarized_when_body_is_empty(self):
        html = '<html><head><meta name="description" content="Only a description"></head><body></body></html>'
        summarizer = FakeSummarizer()
        pipeline = ScrapePipeline(fetcher=FakeFetcher(html=html), summarizer=summarizer)

        pipeline.scrape_and_summarize("https://example.com")
        assert summarizer.calls[0]['content'] == "Only a description"

    def test_nothing_to_summarize(self):
        summarizer = FakeSummarizer()
        pipeline = ScrapePipeline(fetcher=FakeFetcher(html=""), summarizer=summarizer)

        result = pipeline.scrape_and_summarize("https://example.com")

        assert result.metadata.summary == SUMMARY_PLACEHOLDER
        assert result.ok
        assert summarizer.calls == []

    def test_calls_are_independent(self):
        pipeline = ScrapePipeline(fetcher=FakeFetcher(), summarizer=FakeSummarizer())

        first = pipeline.scrape_and_summarize("https://example.com")
        second = pipeline.scrape_and_summarize("https://example.com")

        assert first.metadata is not second.metadata
        assert first.errors is not second.errors


class TestScrape:
    """Tests for ScrapePipeline.scrape()"""

    def test_returns_metadata_with_content(self):
        metadata = ScrapePipeline(fetcher=FakeFetcher()).scrape("example.com")
        assert metadata.url == "https://example.com"
        assert metadata.content == "Hello world content..."

    def test_fetch_error_propagates(self):
        pipeline = ScrapePipeline(fetcher=FakeFetcher(error=FetchError("Request failed: boom")))
        with pytest.raises(FetchError):
            pipeline.scrape("https://example.com")

    def test_missing_url(self):
        with pytest.raises(ValidationError):
            ScrapePipeline(fetcher=FakeFetcher()).scrape("")


class TestFetchFailurePolicy:

    def test_unknown_policy_rejected(self):
        with pytest.raises(ConfigurationError, match="on_fetch_failure"):
            ScrapePipeline(on_fetch_failure='retry')
