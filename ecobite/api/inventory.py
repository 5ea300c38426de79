"""Inventory API endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from ecobite.api.dependencies import CurrentIdentity, get_inventory_service
from ecobite.models.inventory import InventoryItem
from ecobite.schemas.inventory import ItemDraft, ItemResponse
from ecobite.services.inventory_service import InventoryService
from ecobite.services.status import current_date, resolve_status

router = APIRouter(prefix="/inventory", tags=["inventory"])


def to_response(item: InventoryItem, today: date) -> ItemResponse:
    """Serialize an item with its status as of today."""
    return ItemResponse(
        id=item.id,
        user_id=item.user_id,
        name=item.name,
        quantity=item.quantity,
        category=item.category,
        expiry_date=item.expiry_date,
        status=resolve_status(item.status_source, today),
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


@router.get("", response_model=list[ItemResponse])
def list_items(
    identity: CurrentIdentity,
    inventory: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """List the user's items and shared items, soonest expiry first."""
    today = current_date()
    return [to_response(item, today) for item in inventory.list_items(identity.id)]


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    draft: ItemDraft,
    identity: CurrentIdentity,
    inventory: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """Add an item to the user's inventory."""
    item = inventory.create(identity.id, draft)
    return to_response(item, current_date())


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(
    item_id: int,
    identity: CurrentIdentity,
    inventory: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """Get a specific item."""
    return to_response(inventory.get_item(item_id, identity.id), current_date())


@router.put("/{item_id}", response_model=ItemResponse | dict)
def update_item(
    item_id: int,
    draft: ItemDraft,
    identity: CurrentIdentity,
    inventory: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """Update an item.

    Responds with an empty object when the item does not exist or belongs to
    someone else; nothing is changed in that case.
    """
    item = inventory.update(item_id, identity.id, draft)
    if item is None:
        return {}
    return to_response(item, current_date())


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: int,
    identity: CurrentIdentity,
    inventory: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """Remove an item. Succeeds even if there was nothing to remove."""
    inventory.delete(item_id, identity.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{item_id}/donate", response_model=ItemResponse)
def donate_item(
    item_id: int,
    identity: CurrentIdentity,
    inventory: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """Mark an item as donated."""
    return to_response(inventory.donate(item_id, identity.id), current_date())
