from typing import TypedDict, Optional, Dict, Any


class RawAttribution(TypedDict, total=False):
    """One web citation as the provider reported it. Either key may be missing."""
    uri: Optional[str]
    title: Optional[str]


class SourceData(TypedDict):
    """A deduplicated citation attached to a stored analysis."""
    title: Optional[str]
    uri: str


class ProviderReply(TypedDict):
    """Untyped provider output; only `text` and `grounding_metadata` are read downstream."""
    text: str
    grounding_metadata: Dict[str, Any]
    raw: Dict[str, Any]
