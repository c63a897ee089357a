"""WebSocket connection management for the shared table."""

import asyncio
import json
from contextlib import suppress
from uuid import uuid4

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from loguru import logger

from api.schemas import message_to_dict, parse_intent
from core.game import TableGame
from core.game.errors import IllegalIntent, TableError
from core.game.intents import Leave
from core.game.messages import Dispatcher, Message

router = APIRouter()


class ConnectionManager(Dispatcher):
    """
    Manage WebSocket connections and deliver table messages to them.

    ``send`` and ``broadcast`` only enqueue, so the table never waits on a
    socket. One pump task per connection drains its queue in order.
    """

    def __init__(self) -> None:
        self._connections: dict[str, WebSocket] = {}
        self._outboxes: dict[str, asyncio.Queue[Message]] = {}

    async def connect(self, websocket: WebSocket) -> str:
        """Accept a connection and assign it a fresh session id."""
        await websocket.accept()
        session_id = str(uuid4())
        self._connections[session_id] = websocket
        self._outboxes[session_id] = asyncio.Queue()
        logger.info("Session {} connected ({} active)", session_id, self.active_connections)
        return session_id

    def disconnect(self, session_id: str) -> None:
        """Forget a connection; queued messages for it are dropped."""
        self._connections.pop(session_id, None)
        self._outboxes.pop(session_id, None)

    def send(self, session_id: str, message: Message) -> None:
        """Queue a message for one session."""
        outbox = self._outboxes.get(session_id)
        if outbox is not None:
            outbox.put_nowait(message)

    def broadcast(self, message: Message) -> None:
        """Queue a message for every connection."""
        for outbox in self._outboxes.values():
            outbox.put_nowait(message)

    async def pump(self, session_id: str) -> None:
        """Deliver one session's queued messages until its socket fails."""
        websocket = self._connections[session_id]
        outbox = self._outboxes[session_id]
        while True:
            message = await outbox.get()
            try:
                await websocket.send_json(message_to_dict(message))
            except Exception as exc:
                logger.warning("Send to {} failed, stopping delivery: {}", session_id, exc)
                return

    @property
    def active_connections(self) -> int:
        """Return number of active connections."""
        return len(self._connections)


@router.websocket("/table")
async def table_websocket(websocket: WebSocket) -> None:
    """
    WebSocket endpoint for the shared table.

    Messages from client:
    - {"type": "join", "name": "Ann", "bankroll": 100, "bet": 10}
    - {"type": "ready"} | {"type": "allIn"}
    - {"type": "setBet", "value": 25} | {"type": "setBankroll", "value": 500}
    - {"type": "hit"} | {"type": "stand"}
    - {"type": "newRound"}

    Messages to client:
    - {"type": "state", "state": {...}}
    - {"type": "joined", "player": {...}}
    - {"type": "errorMessage", "kind": "...", "text": "..."}
    """
    manager: ConnectionManager = websocket.app.state.manager
    table: TableGame = websocket.app.state.table

    session_id = await manager.connect(websocket)
    table.send_snapshot(session_id)
    sender = asyncio.create_task(manager.pump(session_id))

    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(frame.get("code", 1000))
            data = frame.get("text")
            if data is None:
                table.reject(session_id, IllegalIntent("Messages must be sent as text frames."))
                continue
            try:
                intent = parse_intent(json.loads(data))
            except json.JSONDecodeError:
                table.reject(session_id, IllegalIntent("Messages must be JSON objects."))
                continue
            except TableError as exc:
                table.reject(session_id, exc)
                continue
            table.handle(session_id, intent)
    except WebSocketDisconnect:
        logger.info("Session {} disconnected", session_id)
    finally:
        manager.disconnect(session_id)
        table.handle(session_id, Leave())
        sender.cancel()
        with suppress(asyncio.CancelledError):
            await sender
