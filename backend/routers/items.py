from fastapi import APIRouter, Depends, HTTPException, status
from typing import List, Optional

from core.auth import current_active_user
from db.users import User
from routers.deps import get_item_store, parse_branch_id, resolve_branch_id
from schemas.inventory import (
    CreatedOut,
    InventoryItemCreate,
    InventoryItemOut,
    InventoryItemUpdate,
    UnitCostHistoryOut,
)
from schemas.responses import ApiResponse, ok
from services.items import ItemStore

router = APIRouter()


@router.get("/", response_model=ApiResponse[List[InventoryItemOut]])
async def list_inventory_items(
    branch_id: Optional[str] = None,
    user: User = Depends(current_active_user),
    store: ItemStore = Depends(get_item_store),
):
    rows = await store.get_all(resolve_branch_id(branch_id, user))
    return ok([it.to_schema for it in rows], "Inventory items retrieved successfully")


@router.get("/{item_id}", response_model=ApiResponse[InventoryItemOut])
async def get_inventory_item(
    item_id: int,
    user: User = Depends(current_active_user),
    store: ItemStore = Depends(get_item_store),
):
    item = await store.get_by_id(item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found")
    return ok(item.to_schema, "Inventory item retrieved successfully")


@router.get("/{item_id}/cost-history", response_model=ApiResponse[List[UnitCostHistoryOut]])
async def get_inventory_item_cost_history(
    item_id: int,
    user: User = Depends(current_active_user),
    store: ItemStore = Depends(get_item_store),
):
    if not await store.get_by_id(item_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found")
    rows = await store.cost_history(item_id)
    return ok([h.to_schema for h in rows], "Unit cost history retrieved successfully")


@router.post("/", response_model=ApiResponse[CreatedOut], status_code=status.HTTP_201_CREATED)
async def create_inventory_item(
    payload: InventoryItemCreate,
    branch_id: Optional[str] = None,
    user: User = Depends(current_active_user),
    store: ItemStore = Depends(get_item_store),
):
    branch = payload.branch_id or parse_branch_id(branch_id) or getattr(user, "branch_id", None)
    if not branch:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Branch ID is required")

    new_id = await store.create(payload, branch_id=branch, acting_user_id=user.id)
    return ok({"id": new_id}, "Inventory item created successfully")


@router.put("/{item_id}", response_model=ApiResponse[None])
async def update_inventory_item(
    item_id: int,
    payload: InventoryItemUpdate,
    user: User = Depends(current_active_user),
    store: ItemStore = Depends(get_item_store),
):
    if not await store.update(item_id, payload, acting_user_id=user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found")
    return ok(None, "Inventory item updated successfully")


@router.delete("/{item_id}", response_model=ApiResponse[None])
async def delete_inventory_item(
    item_id: int,
    user: User = Depends(current_active_user),
    store: ItemStore = Depends(get_item_store),
):
    if not await store.delete(item_id, acting_user_id=user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found")
    return ok(None, "Inventory item deleted successfully")
