from .provider import (
    RawAttribution,
    SourceData,
    ProviderReply,
)
from .claims import AnalyzeRequest
from .verdicts import (
    VerdictType,
    NormalizedAnalysis,
)
from .records import (
    Source,
    TrendingRow,
    AnalysisRecord,
    TrendingClaim,
    DeleteResponse,
    ErrorResponse,
)

__all__ = [
    "RawAttribution",
    "SourceData",
    "ProviderReply",

    "AnalyzeRequest",

    "VerdictType",
    "NormalizedAnalysis",

    "Source",
    "TrendingRow",
    "AnalysisRecord",
    "TrendingClaim",
    "DeleteResponse",
    "ErrorResponse",
]
