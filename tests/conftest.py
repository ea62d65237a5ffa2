"""
Shared pytest fixtures for the scrape-and-summarize tests.
"""

import pytest
import sys
import importlib.util
from pathlib import Path
from types import SimpleNamespace

# Project root for finding Cloud Function modules
PROJECT_ROOT = Path(__file__).parent.parent


def _load_module_from_path(module_name: str, file_path: Path):
    """Load a module from a specific file path."""
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


# Load the Cloud Function module with a unique name at module load time
_scrape_functions_module = _load_module_from_path(
    'scrape_functions_main',
    PROJECT_ROOT / 'scrape-functions' / 'main.py'
)


# ============================================================================
# Cloud Function Entry Point Fixtures
# ============================================================================

@pytest.fixture
def scrape_website():
    """Returns scrape_website entry point."""
    return _scrape_functions_module.scrape_website


@pytest.fixture
def summarize_content():
    """Returns summarize_content entry point."""
    return _scrape_functions_module.summarize_content


@pytest.fixture
def scrape_and_summarize():
    """Returns scrape_and_summarize entry point."""
    return _scrape_functions_module.scrape_and_summarize


@pytest.fixture
def mock_flask_request():
    """Factory for creating mock Flask request objects."""
    class MockRequest:
        def __init__(self, json_data=None, method='POST'):
            self._json = json_data
            self.method = method
            self.data = b''

        def get_json(self, force=False, silent=False):
            return self._json

    return MockRequest


@pytest.fixture
def gemini_env(monkeypatch):
    """Environment with a Gemini key and default pipeline settings."""
    monkeypatch.setenv('GEMINI_API_KEY', 'test-gemini-key')
    monkeypatch.delenv('ON_FETCH_FAILURE', raising=False)
    monkeypatch.delenv('FETCH_TIMEOUT', raising=False)


@pytest.fixture
def no_gemini_env(monkeypatch):
    monkeypatch.delenv('GEMINI_API_KEY', raising=False)
    monkeypatch.delenv('ON_FETCH_FAILURE', raising=False)


# ============================================================================
# Gemini Response Fixtures
# ============================================================================

def make_gemini_response(text):
    """Build an object shaped like a generate_content() response."""
    if text is None:
        return SimpleNamespace(candidates=[])
    part = SimpleNamespace(text=text)
    candidate = SimpleNamespace(content=SimpleNamespace(parts=[part]))
    return SimpleNamespace(candidates=[candidate])


@pytest.fixture
def gemini_response():
    """Factory for fake Gemini responses."""
    return make_gemini_response


# ============================================================================
# Sample HTML
# ============================================================================

@pytest.fixture
def sample_article_html():
    """Raw HTML of a sample article page."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>10 Python Tips | Example Blog</title>
        <meta property="og:title" content="10 Python Tips You Should Know">
        <meta name="description" content="Learn essential Python tips">
        <meta property="og:description" content="OG description">
        <meta property="og:image" content="/images/cover.jpg">
        <link rel="shortcut icon" href="/static/old.ico">
        <link rel="icon" href="assets/icon.png">
    </head>
    <body>
        <header>Site header</header>
        <nav>Home | About</nav>
        <article>
            <h1>10 Python Tips You Should Know</h1>
            <p>Here are some tips for Python development.</p>
        </article>
        <aside>Related posts</aside>
        <script>var tracking = true;</script>
        <style>body { color: red; }</style>
        <footer>Copyright</footer>
    </body>
    </html>
    """


@pytest.fixture
def normal_article_html():
    return (
        '<html><head><title>Test Page</title>'
        '<meta name="description" content="A test."></head>'
        '<body>Hello world content...</body></html>'
    )


@pytest.fixture
def og_only_html():
    """Page with OpenGraph tags and no <title>."""
    return """
    <html>
    <head>
        <meta property="og:title" content="OpenGraph Title">
        <meta property="og:description" content="OpenGraph description">
        <meta property="og:image" content="https://cdn.example.com/og.png">
    </head>
    <body><p>Body text</p></body>
    </html>
    """
