"""Collaboration WebSocket endpoint."""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..core.logging import get_logger
from ..realtime import Connection

router = APIRouter(tags=["realtime"])
logger = get_logger("realtime.socket")


@router.websocket("/ws")
async def collaboration_socket(websocket: WebSocket):
    """One socket per client; frames are handled in arrival order.

    Only text frames carry events. Binary frames and frames that fail in a
    handler are logged and dropped without closing the socket.
    """
    gateway = websocket.app.state.collaboration_gateway
    await websocket.accept()

    connection = Connection(websocket)
    gateway.connect(connection)
    logger.info(f"Connection {connection.id} opened")
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))

            raw = message.get("text")
            if raw is None:
                logger.warning(f"Ignoring binary frame from {connection.id}")
                continue

            try:
                await gateway.handle_text(connection, raw)
            except Exception:
                logger.exception(f"Frame from {connection.id} failed; connection kept open")
    except WebSocketDisconnect as e:
        logger.info(f"Connection {connection.id} disconnected (code {e.code})")
    finally:
        await gateway.disconnect(connection)
