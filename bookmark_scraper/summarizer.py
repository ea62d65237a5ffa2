"""
AI summaries of page content using Gemini.

The model is asked for a short, low-variance summary (2-3 sentences) in a
fixed language, Thai by default.
"""

import logging
from typing import Optional

import google.generativeai as genai

from .config import SummarizerConfig
from .errors import ConfigurationError, SummarizeError, ValidationError
from .models import SUMMARY_PLACEHOLDER

logger = logging.getLogger(__name__)

# Bound on the title/URL context embedded in the prompt
MAX_CONTEXT_CHARS = 300

SYSTEM_INSTRUCTION = (
    "You are a helpful assistant that summarizes website content in {language} language. "
    "Provide concise, clear summaries focusing on the main topic and key points."
)

PROMPT_TEMPLATE = """Please summarize the following website content in {language} language (2-3 sentences).
Focus on the main topic and key points:

Website: {website}
Content: {content}

Summary (in {language}):"""


def build_prompt(content: str, title: Optional[str] = None, url: Optional[str] = None,
                 language: str = 'Thai', max_content_chars: int = 4000) -> str:
    website = (title or url or 'Unknown')[:MAX_CONTEXT_CHARS]
    return PROMPT_TEMPLATE.format(
        language=language,
        website=website,
        content=content[:max_content_chars],
    )


def first_candidate_text(response) -> str:
    """Trimmed text of the first candidate, '' if there is none."""
    candidates = getattr(response, 'candidates', None) or []
    if not candidates:
        return ''
    parts = getattr(getattr(candidates[0], 'content', None), 'parts', None) or []
    return ''.join(getattr(part, 'text', '') or '' for part in parts).strip()


class Summarizer:
    """Single request/response summarization. No retries, no streaming."""

    def __init__(self, config: SummarizerConfig = None):
        self.config = config or SummarizerConfig()

    def _model(self) -> genai.GenerativeModel:
        genai.configure(api_key=self.config.api_key)
        return genai.GenerativeModel(
            self.config.model,
            system_instruction=SYSTEM_INSTRUCTION.format(language=self.config.language),
            generation_config=genai.GenerationConfig(
                temperature=self.config.temperature,
                max_output_tokens=self.config.max_output_tokens,
            ),
        )

    def summarize(self, content: str, title: Optional[str] = None, url: Optional[str] = None) -> str:
        """
        Summarize page content.

        Args:
            content: Page text; truncated before it reaches the prompt
            title: Optional page title used as context
            url: Optional page URL used as context when there is no title

        Returns:
            The summary text, or a placeholder if the model returned nothing

        Raises:
            ValidationError: content is empty
            ConfigurationError: no API key configured
            SummarizeError: the provider call failed
        """
        if not isinstance(content, str) or not content.strip():
            raise ValidationError('Content is required')

        if not self.config.api_key:
            raise ConfigurationError('GEMINI_API_KEY not configured')

        prompt = build_prompt(
            content.strip(),
            title=title,
            url=url,
            language=self.config.language,
            max_content_chars=self.config.max_content_chars,
        )

        logger.info("requesting summary", extra={'model': self.config.model, 'url': url})
        try:
            response = self._model().generate_content(
                prompt,
                request_options={'timeout': self.config.request_timeout},
            )
            summary = first_candidate_text(response)
        except Exception as e:
            logger.warning("summarization failed", extra={'url': url, 'error': str(e)})
            raise SummarizeError(str(e)) from e

        if not summary:
            logger.info("model returned no text, using placeholder", extra={'url': url})
            return SUMMARY_PLACEHOLDER

        return summary
