# Pydantic schemas for user-related requests/responses
# fastapi-users provides the base schemas; these add the restaurant fields

from uuid import UUID
from fastapi_users import schemas
from typing import Optional


class UserRead(schemas.BaseUser[UUID]):
    full_name: Optional[str] = None
    branch_id: Optional[int] = None


class UserCreate(schemas.BaseUserCreate):
    full_name: Optional[str] = None
    branch_id: Optional[int] = None


class UserUpdate(schemas.BaseUserUpdate):
    full_name: Optional[str] = None
    branch_id: Optional[int] = None
