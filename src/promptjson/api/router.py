"""API router aggregation."""

from fastapi import APIRouter

from promptjson.api.history import router as history_router
from promptjson.api.operations import router as operations_router
from promptjson.api.workspace import router as workspace_router

api_router = APIRouter()
api_router.include_router(operations_router, tags=["operations"])
api_router.include_router(workspace_router, tags=["workspace"])
api_router.include_router(history_router, tags=["history"])
