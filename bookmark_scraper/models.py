"""
Result types produced per scrape request. Nothing here is persisted.
"""

from dataclasses import dataclass, field
from typing import Dict, List

# Bound on extracted body text, to cap downstream token usage
MAX_CONTENT_LENGTH = 8000

# "Unable to summarize the content"
SUMMARY_PLACEHOLDER = 'ไม่สามารถสรุปเนื้อหาได้'

SCRAPE_FIELDS = ('title', 'description', 'imageUrl', 'faviconUrl', 'content', 'url')
SUMMARY_FIELDS = ('title', 'description', 'imageUrl', 'faviconUrl', 'summary', 'url')


@dataclass
class WebMetadata:
    url: str
    title: str
    description: str = ''
    image_url: str = ''
    favicon_url: str = ''
    content: str = ''
    summary: str = ''

    def to_dict(self, fields=SCRAPE_FIELDS) -> Dict[str, str]:
        """Serialize with the camelCase names used on the wire."""
        wire = {
            'url': self.url,
            'title': self.title,
            'description': self.description,
            'imageUrl': self.image_url,
            'faviconUrl': self.favicon_url,
            'content': self.content,
            'summary': self.summary,
        }
        return {name: wire[name] for name in fields}

    def fallback_summary(self) -> str:
        """Text used when the AI summary is unavailable."""
        return self.description or SUMMARY_PLACEHOLDER


@dataclass
class PipelineResult:
    """Combined metadata and summary, plus any stage errors absorbed by fallbacks."""
    metadata: WebMetadata
    errors: List[dict] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, stage: str, message: str, recoverable: bool = True) -> None:
        self.errors.append({'stage': stage, 'message': message, 'recoverable': recoverable})

    def to_dict(self) -> dict:
        return self.metadata.to_dict(SUMMARY_FIELDS)
