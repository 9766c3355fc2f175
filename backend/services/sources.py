from typing import Any, Dict, Iterable, List

from models.provider import RawAttribution, SourceData


def collect_attributions(grounding_metadata: Any) -> List[RawAttribution]:
    """
    Flatten Gemini grounding metadata into raw {uri, title} attributions.

    Reads groundingChunks[].web first, then the older
    groundingAttributions[].web list. Unexpected shapes are skipped.
    """
    if not isinstance(grounding_metadata, dict):
        return []

    attributions: List[RawAttribution] = []
    for key in ("groundingChunks", "groundingAttributions"):
        entries = grounding_metadata.get(key)
        if not isinstance(entries, list):
            continue
        for entry in entries:
            web = entry.get("web") if isinstance(entry, dict) else None
            if isinstance(web, dict):
                attributions.append(RawAttribution(uri=web.get("uri"), title=web.get("title")))
    return attributions


def dedupe_sources(attributions: Iterable[Dict[str, Any]]) -> List[SourceData]:
    """Unique sources by exact uri, first seen wins; entries without a uri are dropped."""
    seen = set()
    sources: List[SourceData] = []
    for attribution in attributions:
        if not isinstance(attribution, dict):
            continue
        uri = attribution.get("uri")
        if not isinstance(uri, str) or not uri.strip() or uri in seen:
            continue
        seen.add(uri)
        title = attribution.get("title")
        sources.append(SourceData(
            title=title if isinstance(title, str) and title else None,
            uri=uri,
        ))
    return sources
