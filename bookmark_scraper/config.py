"""
Configuration for the scraper and summarizer.

Values come from environment variables and are read when a request is
handled, so a missing API key only surfaces once something needs it.
"""

import json
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError

DEFAULT_USER_AGENT = 'Mozilla/5.0 (compatible; KeeeeepBot/1.0)'
DEFAULT_FETCH_TIMEOUT = 10
DEFAULT_GEMINI_MODEL = 'gemini-2.0-flash'
DEFAULT_REGION = 'us-central1'

FETCH_FAILURE_POLICIES = ('abort', 'degrade')


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    try:
        return int(env.get(name, default))
    except (TypeError, ValueError):
        return default


@dataclass
class SummarizerConfig:
    """Model call parameters for the summarizer."""
    api_key: Optional[str] = None
    model: str = DEFAULT_GEMINI_MODEL
    temperature: float = 0.3
    max_output_tokens: int = 200
    max_content_chars: int = 4000
    request_timeout: int = 30
    language: str = 'Thai'


@dataclass
class Settings:
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    fetch_timeout: int = DEFAULT_FETCH_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    on_fetch_failure: str = 'abort'
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls, env: Mapping[str, str] = None) -> 'Settings':
        env = os.environ if env is None else env
        return cls(
            gemini_api_key=env.get('GEMINI_API_KEY') or None,
            gemini_model=env.get('GEMINI_MODEL') or DEFAULT_GEMINI_MODEL,
            fetch_timeout=_int_env(env, 'FETCH_TIMEOUT', DEFAULT_FETCH_TIMEOUT),
            user_agent=env.get('SCRAPER_USER_AGENT') or DEFAULT_USER_AGENT,
            on_fetch_failure=(env.get('ON_FETCH_FAILURE') or 'abort').lower(),
            log_level=env.get('LOG_LEVEL') or 'INFO',
        )

    def summarizer_config(self) -> SummarizerConfig:
        return SummarizerConfig(api_key=self.gemini_api_key, model=self.gemini_model)


def get_functions_base_url(env: Mapping[str, str] = None) -> str:
    """
    Resolve the base URL of the deployed Cloud Functions.

    Uses the local emulator when FIREBASE_FUNCTIONS_EMULATOR_HOST is set,
    otherwise https://{region}-{project}.cloudfunctions.net.

    Raises:
        ConfigurationError: if no project ID can be found
    """
    env = os.environ if env is None else env

    project = env.get('GCLOUD_PROJECT') or env.get('GCP_PROJECT')
    if not project and env.get('FIREBASE_CONFIG'):
        try:
            project = json.loads(env['FIREBASE_CONFIG']).get('projectId')
        except (ValueError, AttributeError):
            project = None

    region = env.get('GCLOUD_REGION') or env.get('FUNCTION_REGION') or DEFAULT_REGION

    emulator_host = env.get('FIREBASE_FUNCTIONS_EMULATOR_HOST')
    if emulator_host and project:
        return f"http://{emulator_host}/{project}/{region}"

    if not project:
        raise ConfigurationError('Project ID is not configured')

    return f"https://{region}-{project}.cloudfunctions.net"
