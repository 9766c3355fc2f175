from typing import Dict, Any, Optional

import httpx

from config import logger
from config.constants import LLM_CONFIG
from exceptions import (
    ProviderConfigurationError,
    ProviderUnavailableError,
    EmptyProviderResponse,
)
from models.provider import ProviderReply
from prompts import SYSTEM_INSTRUCTION


class GeminiClient:
    """Single-shot generateContent calls with Google Search grounding enabled."""

    def __init__(
        self,
        api_key: Optional[str],
        endpoint: str,
        timeout: float = LLM_CONFIG.REQUEST_TIMEOUT,
        system_instruction: str = SYSTEM_INSTRUCTION
    ):
        self.api_key = api_key
        self.endpoint = endpoint
        self.timeout = timeout
        self.system_instruction = system_instruction

    def build_request_body(self, claim: str) -> Dict[str, Any]:
        return {
            "systemInstruction": {"parts": [{"text": self.system_instruction}]},
            "contents": [{"role": "user", "parts": [{"text": claim}]}],
            "tools": [{"google_search": {}}],
        }

    async def analyze(self, claim: str) -> ProviderReply:
        if not self.api_key:
            logger.critical("GEMINI_API_KEY not configured.")
            raise ProviderConfigurationError("API key not configured")

        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key}
        body = self.build_request_body(claim)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.endpoint, headers=headers, json=body)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("Gemini HTTP error %s for URL %s: %s", status, self.endpoint, e.response.text)
            raise ProviderUnavailableError(
                f"HTTP {status}",
                upstream_status=status,
                busy=status in LLM_CONFIG.BUSY_STATUS_CODES
            )
        except httpx.TimeoutException as e:
            logger.error("Gemini request timed out after %ss: %s", self.timeout, str(e))
            raise ProviderUnavailableError("Request timed out", busy=True)
        except httpx.RequestError as e:
            logger.error("Gemini request error for URL %s: %s", self.endpoint, str(e))
            raise ProviderUnavailableError(f"Request failed: {str(e)}")
        except ValueError as e:
            logger.error("Gemini returned a non-JSON body: %s", str(e))
            raise ProviderUnavailableError("Invalid response body")

        return parse_gemini_reply(data)


def parse_gemini_reply(data: Any) -> ProviderReply:
    """Pull reply text and grounding metadata out of a generateContent payload."""
    if not isinstance(data, dict):
        raise EmptyProviderResponse("response was not an object")

    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        block_reason = (data.get("promptFeedback") or {}).get("blockReason")
        logger.error("Gemini returned no candidates (blockReason=%s).", block_reason)
        raise EmptyProviderResponse(f"no candidates (blockReason={block_reason})")

    candidate = candidates[0]
    parts = (candidate.get("content") or {}).get("parts") or []
    text = "".join(
        part["text"] for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    )
    if not text.strip():
        logger.error("Gemini candidate had no text (finishReason=%s).", candidate.get("finishReason"))
        raise EmptyProviderResponse(f"no text (finishReason={candidate.get('finishReason')})")

    grounding = candidate.get("groundingMetadata")
    return ProviderReply(
        text=text,
        grounding_metadata=grounding if isinstance(grounding, dict) else {},
        raw=data,
    )
