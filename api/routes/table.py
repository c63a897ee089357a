"""Read-only table endpoints."""

from fastapi import APIRouter, Request

from api.schemas import TableStateResponse
from core.game import TableGame

router = APIRouter()


@router.get("/state")
async def table_state(request: Request) -> TableStateResponse:
    """Public projection of the table, as any spectator would see it."""
    table: TableGame = request.app.state.table
    return TableStateResponse.from_view(table.snapshot())
