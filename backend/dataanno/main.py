from contextlib import asynccontextmanager

from fastapi import FastAPI

from dataanno.api.router import api_router
from dataanno.core.config import get_settings
from dataanno.core.logging import configure_logging
from dataanno.db.session import dispose_engine

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await dispose_engine()


app = FastAPI(title=get_settings().app_name, lifespan=lifespan)

app.include_router(api_router, prefix="/api")
