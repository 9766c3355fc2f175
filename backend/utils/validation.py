from typing import Any

from config.constants import CLAIM_CONFIG
from exceptions import InvalidInput


class InputValidator:

    @staticmethod
    def clean_claim(claim: Any, max_length: int = CLAIM_CONFIG.MAX_LENGTH) -> str:
        """Trim a submitted claim and enforce emptiness/length limits on the trimmed text."""
        if not isinstance(claim, str):
            raise InvalidInput("claimText", "claimText (string) is required and cannot be empty.")

        claim = claim.strip()

        if not claim:
            raise InvalidInput("claimText", "claimText (string) is required and cannot be empty.")

        if len(claim) > max_length:
            raise InvalidInput(
                "claimText",
                f"Input text exceeds maximum length of {max_length} characters."
            )

        return claim

    @staticmethod
    def summarize_claim(claim: str, max_length: int = CLAIM_CONFIG.SUMMARY_LENGTH) -> str:
        """Display form of a claim, never longer than max_length; truncation ends in an ellipsis."""
        if len(claim) <= max_length:
            return claim
        marker = CLAIM_CONFIG.ELLIPSIS
        if max_length <= len(marker):
            return claim[:max_length]
        return claim[: max_length - len(marker)] + marker
