from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field, field_validator


CategoryType = Literal["Inventory", "Maintenance", "Utilities / Bills", "Salary & Rent", "Others"]
CategoryIcon = Literal[
    "package",
    "meat",
    "seafood",
    "vegetables",
    "dairy",
    "grains",
    "oils",
    "pasta",
    "beverages",
]

DEFAULT_CATEGORY_TYPE = "Inventory"


def _strip_nullable(v):
    if v is None:
        return None
    if not isinstance(v, str):
        # left for the field's own type check
        return v
    v = v.strip()
    return v or None


class CategoryUpdate(BaseModel):
    name: str = Field(max_length=120, validation_alias=AliasChoices("name", "CATEGORY_NAME"))
    category_type: CategoryType = Field(
        default=DEFAULT_CATEGORY_TYPE,
        validation_alias=AliasChoices("category_type", "categoryType", "CATEGORY_TYPE"),
    )
    description: Optional[str] = Field(default=None, validation_alias=AliasChoices("description", "DESCRIPTION"))
    icon: Optional[CategoryIcon] = Field(default=None, validation_alias=AliasChoices("icon", "ICON"))

    @field_validator("name", mode="before")
    @classmethod
    def _strip_required(cls, v) -> str:
        v = str(v or "").strip()
        if not v:
            raise ValueError("Category name is required")
        return v

    @field_validator("category_type", mode="before")
    @classmethod
    def _default_type(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_CATEGORY_TYPE
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, v):
        return _strip_nullable(v)

    @field_validator("icon", mode="before")
    @classmethod
    def _icon(cls, v):
        v = _strip_nullable(v)
        if isinstance(v, str):
            return v.lower()
        return v


class CategoryCreate(CategoryUpdate):
    branch_id: int = Field(gt=0, validation_alias=AliasChoices("branch_id", "branchId", "BRANCH_ID"))


class CategoryOut(BaseModel):
    id: int
    branch_id: int
    name: str
    category_type: str
    description: Optional[str] = None
    icon: Optional[str] = None
    active: bool
    encoded_by: Optional[UUID] = None
    encoded_dt: Optional[datetime] = None
    edited_by: Optional[UUID] = None
    edited_dt: Optional[datetime] = None

    class Config:
        from_attributes = True


class CategoryMetricsOut(CategoryOut):
    total_items: int = 0
    total_value: float = 0.0


class InventoryItemUpdate(BaseModel):
    item_name: str = Field(max_length=120, validation_alias=AliasChoices("item_name", "name", "ITEM_NAME"))
    category_id: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("category_id", "categoryId", "CATEGORY_ID")
    )
    category_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("category_name", "category", "CATEGORY_NAME")
    )
    stock_qty: float = Field(
        default=0, allow_inf_nan=False, validation_alias=AliasChoices("stock_qty", "stock", "STOCK_QTY")
    )
    unit: str = Field(default="pcs", validation_alias=AliasChoices("unit", "UNIT"))
    unit_cost: float = Field(
        default=0, ge=0, allow_inf_nan=False, validation_alias=AliasChoices("unit_cost", "unitCost", "UNIT_COST")
    )
    reorder_level: float = Field(
        default=0, allow_inf_nan=False, validation_alias=AliasChoices("reorder_level", "reorderLevel", "REORDER_LEVEL")
    )
    status_flag: str = Field(default="In Stock", validation_alias=AliasChoices("status_flag", "status", "STATUS_FLAG"))

    @field_validator("item_name", mode="before")
    @classmethod
    def _strip_required(cls, v) -> str:
        v = str(v or "").strip()
        if not v:
            raise ValueError("Item name is required")
        return v

    @field_validator("category_id", mode="before")
    @classmethod
    def _category_id(cls, v):
        # the dashboard sends "" or 0 for "no category"
        if v in (None, "", 0, "0"):
            return None
        return v

    @field_validator("category_name", mode="before")
    @classmethod
    def _category_name(cls, v):
        return _strip_nullable(v)

    @field_validator("unit", "status_flag", mode="before")
    @classmethod
    def _defaulted_text(cls, v, info):
        v = _strip_nullable(v)
        if v is None:
            return "pcs" if info.field_name == "unit" else "In Stock"
        return v

    @field_validator("stock_qty", "unit_cost", "reorder_level", mode="before")
    @classmethod
    def _number(cls, v):
        if v is None or v == "":
            return 0
        return v


class InventoryItemCreate(InventoryItemUpdate):
    # optional here: falls back to the query string, then the user's branch
    branch_id: Optional[int] = Field(
        default=None, gt=0, validation_alias=AliasChoices("branch_id", "branchId", "BRANCH_ID")
    )


class InventoryItemOut(BaseModel):
    id: int
    branch_id: int
    item_name: str
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    stock_qty: float
    unit: str
    unit_cost: float
    reorder_level: float
    status_flag: str
    active: bool
    encoded_by: Optional[UUID] = None
    encoded_dt: Optional[datetime] = None
    edited_by: Optional[UUID] = None
    edited_dt: Optional[datetime] = None


class UnitCostHistoryOut(BaseModel):
    id: int
    inventory_id: int
    branch_id: int
    old_unit_cost: float
    new_unit_cost: float
    change_type: Literal["INITIAL", "INCREASE", "DECREASE"]
    changed_by: Optional[UUID] = None
    changed_at: datetime


class CreatedOut(BaseModel):
    id: int
