from fastapi import APIRouter, Depends, HTTPException, status
from typing import List, Optional

from core.auth import current_active_user
from db.users import User
from routers.deps import get_category_store, get_item_store, resolve_branch_id
from schemas.inventory import CategoryCreate, CategoryMetricsOut, CategoryOut, CategoryUpdate, CreatedOut
from schemas.responses import ApiResponse, ok
from services.categories import CategoryStore
from services.items import ItemStore
from services.rollup import attach_metrics

router = APIRouter()


@router.get("/", response_model=ApiResponse[List[CategoryOut]])
async def list_categories(
    branch_id: Optional[str] = None,
    user: User = Depends(current_active_user),
    store: CategoryStore = Depends(get_category_store),
):
    rows = await store.get_all(resolve_branch_id(branch_id, user))
    return ok([c.to_schema for c in rows], "Categories retrieved successfully")


@router.get("/metrics", response_model=ApiResponse[List[CategoryMetricsOut]])
async def category_metrics(
    branch_id: Optional[str] = None,
    user: User = Depends(current_active_user),
    store: CategoryStore = Depends(get_category_store),
    items: ItemStore = Depends(get_item_store),
):
    """Active categories with item counts and stock value for the same branch."""
    branch = resolve_branch_id(branch_id, user)
    categories = await store.get_all(branch)
    inventory = await items.get_all(branch)
    return ok(attach_metrics(categories, inventory), "Category metrics retrieved successfully")


@router.get("/{category_id}", response_model=ApiResponse[CategoryOut])
async def get_category(
    category_id: int,
    user: User = Depends(current_active_user),
    store: CategoryStore = Depends(get_category_store),
):
    category = await store.get_by_id(category_id)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return ok(category.to_schema, "Category retrieved successfully")


@router.post("/", response_model=ApiResponse[CreatedOut], status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate,
    user: User = Depends(current_active_user),
    store: CategoryStore = Depends(get_category_store),
):
    new_id = await store.create(payload, acting_user_id=user.id)
    return ok({"id": new_id}, "Category created successfully")


@router.put("/{category_id}", response_model=ApiResponse[None])
async def update_category(
    category_id: int,
    payload: CategoryUpdate,
    user: User = Depends(current_active_user),
    store: CategoryStore = Depends(get_category_store),
):
    if not await store.update(category_id, payload, acting_user_id=user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return ok(None, "Category updated successfully")


@router.delete("/{category_id}", response_model=ApiResponse[None])
async def delete_category(
    category_id: int,
    user: User = Depends(current_active_user),
    store: CategoryStore = Depends(get_category_store),
):
    if not await store.delete(category_id, acting_user_id=user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return ok(None, "Category deleted successfully")
