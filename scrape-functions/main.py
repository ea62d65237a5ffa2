"""
Scrape & Summarize Cloud Functions

HTTP entry points behind the bookmarking app's "add bookmark" flow.

Endpoints (all POST with a JSON body):
- scrape_website:        {url}                 -> page metadata and text content
- summarize_content:     {content, url, title} -> Thai summary of the content
- scrape_and_summarize:  {url}                 -> page metadata and summary

Does NOT:
- Persist bookmarks (the app writes them to its document store)
- Retry failed fetches or AI calls
- Call sibling endpoints over HTTP (stages are composed in-process)
"""

import functions_framework
import json
import logging
import os
import sys
from functools import partial

# Make bookmark_scraper importable when deployed from this directory
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from bookmark_scraper.config import Settings
from bookmark_scraper.errors import (
    ConfigurationError,
    FetchError,
    PipelineError,
    SummarizeError,
    ValidationError,
)
from bookmark_scraper.fetcher import fetch_webpage
from bookmark_scraper.logging_config import setup_logging
from bookmark_scraper.models import SCRAPE_FIELDS
from bookmark_scraper.pipeline import ScrapePipeline
from bookmark_scraper.summarizer import Summarizer

setup_logging(Settings.from_env().log_level)
logger = logging.getLogger(__name__)

PREFLIGHT_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET, POST, OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type, Authorization',
    'Access-Control-Max-Age': '3600'
}

RESPONSE_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Content-Type': 'application/json'
}


def _respond(body: dict, status: int = 200) -> tuple:
    return (json.dumps(body, ensure_ascii=False), status, RESPONSE_HEADERS)


def _error(message: str, status: int, details: str = None) -> tuple:
    body = {'error': message}
    if details is not None:
        body['details'] = details
    return _respond(body, status)


def _check_method(request):
    """Answer CORS pre-flight and reject anything but POST. None means carry on."""
    if request.method == 'OPTIONS':
        return ('', 204, PREFLIGHT_HEADERS)
    if request.method != 'POST':
        return _error('Method not allowed', 405)
    return None


def _request_json(request) -> dict:
    request_json = request.get_json(silent=True)
    return request_json if isinstance(request_json, dict) else {}


def build_pipeline(settings: Settings = None) -> ScrapePipeline:
    """Pipeline wired from environment configuration, read per request."""
    settings = settings or Settings.from_env()
    return ScrapePipeline(
        fetcher=partial(fetch_webpage, timeout=settings.fetch_timeout, user_agent=settings.user_agent),
        summarizer=Summarizer(settings.summarizer_config()),
        on_fetch_failure=settings.on_fetch_failure,
    )


@functions_framework.http
def scrape_website(request):
    """
    Fetch a page and extract its metadata.

    Expected JSON input:
    {
        "url": "https://example.com/article"
    }
    """
    rejected = _check_method(request)
    if rejected:
        return rejected

    url = _request_json(request).get('url')
    if not url:
        return _error('URL is required', 400)

    try:
        metadata = build_pipeline().scrape(url)
    except ValidationError as e:
        return _error(str(e), 400)
    except FetchError as e:
        logger.error("scrape failed", extra={'url': url, 'error': str(e)})
        return _error('Failed to scrape website', 500, str(e))
    except Exception as e:
        logger.exception("unexpected scrape error", extra={'url': url})
        return _error('Failed to scrape website', 500, str(e))

    return _respond({'success': True, 'data': metadata.to_dict(SCRAPE_FIELDS)})


@functions_framework.http
def summarize_content(request):
    """
    Summarize already-extracted page content.

    Expected JSON input:
    {
        "content": "Page text...",
        "url": "https://example.com/article",   (optional)
        "title": "Article title"                (optional)
    }
    """
    rejected = _check_method(request)
    if rejected:
        return rejected

    request_json = _request_json(request)
    content = request_json.get('content')
    if not isinstance(content, str) or not content.strip():
        return _error('Content is required', 400)

    url = request_json.get('url')
    title = request_json.get('title')

    try:
        summarizer = Summarizer(Settings.from_env().summarizer_config())
        summary = summarizer.summarize(content, title=title, url=url)
    except ValidationError as e:
        return _error(str(e), 400)
    except (SummarizeError, ConfigurationError) as e:
        logger.error("summarize failed", extra={'url': url, 'error': str(e)})
        return _error('Failed to summarize content', 500, str(e))
    except Exception as e:
        logger.exception("unexpected summarize error", extra={'url': url})
        return _error('Failed to summarize content', 500, str(e))

    return _respond({'success': True, 'data': {'summary': summary}})


@functions_framework.http
def scrape_and_summarize(request):
    """
    Fetch, extract and summarize a page in one call.

    Expected JSON input:
    {
        "url": "https://example.com/article"
    }

    Summarization failures are recoverable: the summary falls back to the page
    description and the failure is reported in an "errors" array.
    """
    rejected = _check_method(request)
    if rejected:
        return rejected

    url = _request_json(request).get('url')
    if not url:
        return _error('URL is required', 400)

    try:
        result = build_pipeline().scrape_and_summarize(url)
    except ValidationError as e:
        return _error(str(e), 400)
    except (PipelineError, ConfigurationError) as e:
        logger.error("scrape and summarize failed", extra={'url': url, 'error': str(e)})
        return _error('Failed to scrape and summarize', 500, str(e))
    except Exception as e:
        logger.exception("unexpected scrape and summarize error", extra={'url': url})
        return _error('Failed to scrape and summarize', 500, str(e))

    body = {'success': True, 'data': result.to_dict()}
    # Partial success: include absorbed stage errors
    if result.errors:
        body['errors'] = result.errors

    return _respond(body)
