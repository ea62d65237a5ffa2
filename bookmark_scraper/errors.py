"""
Error taxonomy for the scrape-and-summarize pipeline.

Extraction has no error type of its own: it always degrades to defaults.
"""


class ScraperError(Exception):
    """Base exception for bookmark scraper errors"""
    pass


class ValidationError(ScraperError):
    """Missing or malformed URL/content input"""
    pass


class FetchError(ScraperError):
    """Network failure, timeout or non-success status while fetching a page"""
    pass


class SummarizeError(ScraperError):
    """AI provider call failed or returned an unusable response"""
    pass


class ConfigurationError(ScraperError):
    """Required configuration (API key, project ID, policy) is missing or invalid"""
    pass


class PipelineError(ScraperError):
    """A pipeline stage failed and aborted the request"""

    def __init__(self, stage: str, message: str):
        super().__init__(message)
        self.stage = stage
        self.message = message

    def to_dict(self, recoverable: bool = False) -> dict:
        return {'stage': self.stage, 'message': self.message, 'recoverable': recoverable}


class FunctionsClientError(ScraperError):
    """A deployed endpoint answered with a non-success status"""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code
