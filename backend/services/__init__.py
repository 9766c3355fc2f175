from .llm import GeminiClient, parse_gemini_reply
from .normalizer import normalize_response
from .sources import collect_attributions, dedupe_sources
from .trending import aggregate_trending
from .submission import ClaimSubmissionService
from .history import HistoryService

__all__ = [
    "GeminiClient",
    "parse_gemini_reply",
    "normalize_response",
    "collect_attributions",
    "dedupe_sources",
    "aggregate_trending",
    "ClaimSubmissionService",
    "HistoryService",
]
