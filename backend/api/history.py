from fastapi import APIRouter, Request, status

from models.form import HistoryEntry

router = APIRouter(prefix="/api/history", tags=["history"])


@router.get("", response_model=list[HistoryEntry])
async def list_history(request: Request) -> list[HistoryEntry]:
    """Saved calculations, newest first."""
    return request.app.state.history.entries()


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_history(request: Request) -> None:
    request.app.state.history.clear()
