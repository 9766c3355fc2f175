from dataclasses import dataclass


@dataclass(frozen=True)
class LLMConfig:
    REQUEST_TIMEOUT: float = 60.0
    # Upstream statuses that mean "try again later" rather than "broken".
    BUSY_STATUS_CODES: frozenset = frozenset({429, 503})


@dataclass(frozen=True)
class ClaimConfig:
    ELLIPSIS: str = "..."
    MAX_LENGTH: int = 5000
    SUMMARY_LENGTH: int = 150


@dataclass(frozen=True)
class VerdictConfig:
    """Verdict vocabulary accepted from the model."""
    VALID: tuple = ("Real", "Fake", "Disputed", "Uncertain")
    FALLBACK: str = "Uncertain"
    MIN_SCORE: int = 0
    MAX_SCORE: int = 100


LLM_CONFIG = LLMConfig()
CLAIM_CONFIG = ClaimConfig()
VERDICT_CONFIG = VerdictConfig()
