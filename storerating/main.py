import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storerating.config import CORS_ORIGINS, LOG_LEVEL
from storerating.api.core.middleware import register_exception_handlers
from storerating.lib.db_con import close_db, init_db
from storerating.api.routers import (
    # auth
    authRoute,
    # admin
    adminRoute,
    # store owner
    storeOwnerRoute,
    # user
    storeRoute,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Runs once when the app starts and once when it shuts down
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up")
    init_db()

    yield

    logger.info("Application shutting down")
    close_db()


app = FastAPI(title="Store Rating API", lifespan=lifespan, root_path="/api")
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)


@app.get("/")
def root():
    return {"message": "Store Rating API"}


# Auth
app.include_router(authRoute.router)
# Admin
app.include_router(adminRoute.router)
# Store owner
app.include_router(storeOwnerRoute.router)
# User
app.include_router(storeRoute.router)
