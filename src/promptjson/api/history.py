"""History and favorites API endpoints."""

import logging

from fastapi import APIRouter, HTTPException

from promptjson.dependencies import WorkspaceServiceDep
from promptjson.storage.records import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter()


def _listing(store: RecordStore) -> dict:
    records = store.list_records()
    return {
        "records": [record.model_dump(mode="json") for record in records],
        "total": len(records),
    }


def _open(workspace, store: RecordStore, record_id: str) -> dict:
    record = store.get(record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Record not found")

    workspace.open_record(record)
    return {"status": "ready", "id": record.id}


# History endpoints
@router.get("/history")
async def list_history(workspace: WorkspaceServiceDep):
    """List history records, most recent first."""
    return _listing(workspace.history)


@router.delete("/history")
async def clear_history(workspace: WorkspaceServiceDep):
    """Delete every history record. Favorites are untouched."""
    workspace.history.clear()
    return {"status": "cleared"}


@router.delete("/history/{record_id}")
async def delete_history_record(record_id: str, workspace: WorkspaceServiceDep):
    """Delete one history record. An unknown ID is a no-op."""
    if not workspace.history.remove(record_id):
        return {"status": "not_found"}
    return {"status": "deleted"}


@router.post("/history/{record_id}/favorite")
async def add_favorite(record_id: str, workspace: WorkspaceServiceDep):
    """Copy a history record into favorites."""
    favorite = workspace.add_favorite(record_id)
    if not favorite:
        raise HTTPException(status_code=404, detail="Record not found")
    return favorite.model_dump(mode="json")


@router.post("/history/{record_id}/open")
async def open_history_record(record_id: str, workspace: WorkspaceServiceDep):
    """Select a history record for loading into the workspace."""
    return _open(workspace, workspace.history, record_id)


# Favorites endpoints
@router.get("/favorites")
async def list_favorites(workspace: WorkspaceServiceDep):
    """List favorite records."""
    return _listing(workspace.favorites)


@router.delete("/favorites")
async def clear_favorites(workspace: WorkspaceServiceDep):
    """Delete every favorite. History is untouched."""
    workspace.favorites.clear()
    return {"status": "cleared"}


@router.delete("/favorites/{record_id}")
async def delete_favorite(record_id: str, workspace: WorkspaceServiceDep):
    """Remove one favorite. The history record with the same ID is kept."""
    if not workspace.favorites.remove(record_id):
        return {"status": "not_found"}
    return {"status": "deleted"}


@router.post("/favorites/{record_id}/open")
async def open_favorite(record_id: str, workspace: WorkspaceServiceDep):
    """Select a favorite for loading into the workspace."""
    return _open(workspace, workspace.favorites, record_id)
