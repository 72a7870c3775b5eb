from fastapi import FastAPI
import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from core.auth import fastapi_users, auth_backend
from core.config import settings
from core.exception_handler import setup_exception_handlers
from core.logger import setup_logging
from db.database import create_db_and_tables
from routers.categories import router as categories_router
from routers.items import router as items_router
from schemas.users import UserRead, UserCreate, UserUpdate

logger = setup_logging(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_db_and_tables()
    logger.info("Restaurant inventory API started")
    yield


app = FastAPI(
    title="Restaurant Inventory API",
    description="Branch-scoped inventory categories, items and category metrics",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)


# Authentication routes (fastapi-users)
app.include_router(fastapi_users.get_auth_router(auth_backend), prefix="/auth/jwt", tags=["auth"],)
app.include_router(fastapi_users.get_register_router(UserRead, UserCreate), prefix="/auth", tags=["auth"])
app.include_router(fastapi_users.get_users_router(UserRead, UserUpdate), prefix="/users", tags=["users"])

# Inventory routes
app.include_router(categories_router, prefix="/inventory/categories", tags=["inventory-categories"])
app.include_router(items_router, prefix="/inventory/items", tags=["inventory-items"])

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
