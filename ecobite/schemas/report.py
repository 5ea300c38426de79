"""Report schemas."""

from pydantic import BaseModel, Field


class ReportSummary(BaseModel):
    """Item counts per category and per display status.

    Donated + Expired + NearExpiry + Available equals the number of items.
    """

    Refrigerated: int = 0
    Pantry: int = 0
    Frozen: int = 0
    Donated: int = 0
    Expired: int = 0
    NearExpiry: int = 0
    Available: int = 0
    total: int = Field(default=0, description="Number of items summarized")
