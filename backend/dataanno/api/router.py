from fastapi import APIRouter

from dataanno.api.routes import annotations, data_records

api_router = APIRouter()

api_router.include_router(annotations.router)
api_router.include_router(data_records.router)


@api_router.get("/health", tags=["health"])
def health() -> dict:
    return {"status": "ok"}
