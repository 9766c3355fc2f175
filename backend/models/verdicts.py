from typing import TypedDict, Literal

VerdictType = Literal["Real", "Fake", "Disputed", "Uncertain"]


class NormalizedAnalysis(TypedDict):
    """Validated model output: what survives the normalizer."""
    verdict: VerdictType
    score: int
    explanation: str
