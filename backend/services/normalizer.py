import math
from typing import Any

from config import logger
from config.constants import VERDICT_CONFIG
from exceptions import MalformedResponse, IncompleteResponse
from models.verdicts import NormalizedAnalysis, VerdictType
from utils.parsing import locate_json_span, decode_json_object

_CANONICAL_VERDICTS = {v.lower(): v for v in VERDICT_CONFIG.VALID}


def normalize_response(raw_text: str) -> NormalizedAnalysis:
    """
    Turn a raw model reply into a validated verdict/score/explanation triple.

    Lenient policy: unknown verdicts become "Uncertain" and numeric scores are
    rounded and clamped to 0-100. Anything else that is missing or mistyped
    raises IncompleteResponse; a reply without a decodable JSON object raises
    MalformedResponse.
    """
    span = locate_json_span(raw_text)
    if span is None:
        logger.error("Could not find JSON block in AI response: %s", raw_text)
        raise MalformedResponse("AI response did not contain the expected JSON format.", raw_text or "")

    try:
        data = decode_json_object(span)
    except ValueError as e:
        logger.error("Error parsing AI response JSON: %s. Raw AI response: %s", e, raw_text)
        raise MalformedResponse(f"Failed to parse the analysis result from the AI: {e}", raw_text)

    verdict = data.get("verdict")
    score = data.get("score")
    explanation = data.get("explanation")

    missing = []
    if not isinstance(verdict, str) or not verdict.strip():
        missing.append("verdict")
    if not _is_number(score):
        missing.append("score")
    if not isinstance(explanation, str) or not explanation.strip():
        missing.append("explanation")
    if missing:
        logger.error("Parsed JSON is missing required fields %s. Raw AI response: %s", missing, raw_text)
        raise IncompleteResponse(
            f"Parsed JSON is missing required fields ({', '.join(missing)}).",
            raw_text
        )

    return NormalizedAnalysis(
        verdict=coerce_verdict(verdict),
        score=clamp_score(score),
        explanation=explanation.strip(),
    )


def coerce_verdict(verdict: str) -> VerdictType:
    canonical = _CANONICAL_VERDICTS.get(verdict.strip().lower())
    if canonical is None:
        logger.warning("LLM returned invalid verdict: %s. Defaulting to %s.", verdict, VERDICT_CONFIG.FALLBACK)
        return VERDICT_CONFIG.FALLBACK
    return canonical


def clamp_score(score: float) -> int:
    clamped = max(VERDICT_CONFIG.MIN_SCORE, min(VERDICT_CONFIG.MAX_SCORE, int(round(score))))
    if clamped != score:
        logger.info("Adjusted LLM score %s to %s.", score, clamped)
    return clamped


def _is_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false is not a score.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # Python ints are unbounded and always finite; only floats can be inf/nan.
    if isinstance(value, float):
        return math.isfinite(value)
    return True
