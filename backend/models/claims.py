from pydantic import BaseModel, ConfigDict, Field


class AnalyzeRequest(BaseModel):
    """Request body for POST /analysis. Emptiness and length are checked by the submission service."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"claimText": "The moon is made of cheese"}},
    )

    claim_text: str = Field(..., alias="claimText")
