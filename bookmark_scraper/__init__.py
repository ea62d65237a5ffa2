"""Scrape-and-summarize pipeline for the bookmarking app."""

from .errors import (
    ScraperError,
    ValidationError,
    FetchError,
    SummarizeError,
    ConfigurationError,
    PipelineError,
    FunctionsClientError,
)

from .config import (
    Settings,
    SummarizerConfig,
    get_functions_base_url,
)

from .models import (
    MAX_CONTENT_LENGTH,
    SUMMARY_PLACEHOLDER,
    WebMetadata,
    PipelineResult,
)

from .url_utils import (
    normalize_url,
    is_valid_url,
    get_origin,
    resolve_url,
)

from .extractor import Extractor, SoupExtractor, extract
from .fetcher import fetch_webpage
from .summarizer import Summarizer
from .pipeline import ScrapePipeline
from .client import FunctionsClient

__all__ = [
    # Errors
    'ScraperError',
    'ValidationError',
    'FetchError',
    'SummarizeError',
    'ConfigurationError',
    'PipelineError',
    'FunctionsClientError',
    # Configuration
    'Settings',
    'SummarizerConfig',
    'get_functions_base_url',
    # Data model
    'MAX_CONTENT_LENGTH',
    'SUMMARY_PLACEHOLDER',
    'WebMetadata',
    'PipelineResult',
    # URL utilities
    'normalize_url',
    'is_valid_url',
    'get_origin',
    'resolve_url',
    # Pipeline stages
    'Extractor',
    'SoupExtractor',
    'extract',
    'fetch_webpage',
    'Summarizer',
    'ScrapePipeline',
    'FunctionsClient',
]
