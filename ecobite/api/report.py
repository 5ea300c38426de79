"""Report API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from ecobite.api.dependencies import CurrentIdentity, get_inventory_service
from ecobite.schemas.report import ReportSummary
from ecobite.services.inventory_service import InventoryService
from ecobite.services.report import summarize
from ecobite.services.status import current_date

router = APIRouter(prefix="/report", tags=["report"])


@router.get("", response_model=ReportSummary)
def get_report(
    identity: CurrentIdentity,
    inventory: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """Counts of visible items per category and per status."""
    return summarize(inventory.list_items(identity.id), current_date())
