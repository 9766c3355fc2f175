import asyncio
from typing import Optional, Protocol

from starlette.concurrency import run_in_threadpool

from config import logger, Settings
from db.history_store import HistoryStore
from models.provider import ProviderReply
from models.records import AnalysisRecord
from utils.validation import InputValidator
from .normalizer import normalize_response
from .sources import collect_attributions, dedupe_sources


class AnalysisProvider(Protocol):
    async def analyze(self, claim: str) -> ProviderReply: ...


class ClaimSubmissionService:
    """
    validate -> provider -> normalize -> dedupe sources -> persist.

    Each step raises on failure and nothing after it runs, so a record is
    only written once the provider reply has been fully validated.
    """

    def __init__(self, provider: AnalysisProvider, store: HistoryStore, settings: Settings):
        self.provider = provider
        self.store = store
        self.settings = settings

    async def submit(self, claim_text: str, owner_id: Optional[str] = None) -> AnalysisRecord:
        start_time = asyncio.get_running_loop().time()

        claim = InputValidator.clean_claim(claim_text, self.settings.MAX_CLAIM_LENGTH)

        reply = await self.provider.analyze(claim)
        analysis = normalize_response(reply["text"])
        sources = dedupe_sources(collect_attributions(reply["grounding_metadata"]))

        logger.info(
            f"Claim analyzed: verdict={analysis['verdict']} score={analysis['score']} "
            f"with {len(sources)} sources."
        )

        record = await run_in_threadpool(
            self.store.create,
            claim=InputValidator.summarize_claim(claim, self.settings.CLAIM_SUMMARY_LENGTH),
            full_claim=claim,
            verdict=analysis["verdict"],
            score=analysis["score"],
            explanation=analysis["explanation"],
            sources=sources,
            owner_id=owner_id,
        )

        duration = round(asyncio.get_running_loop().time() - start_time, 2)
        logger.info(f"Verification completed for claim '{claim[:50]}...' in {duration} seconds.")
        return record
