"""
Real-time relay WebSocket route.

Viewers connect to /ws/relay and receive {"type", "data"} JSON events.
The channel is broadcast-only; inbound messages are ignored.
"""

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status

from satstream.di.dependencies import get_broadcast_hub
from satstream.infrastructure.monitoring import get_logger
from satstream.infrastructure.relay import BroadcastHub

logger = get_logger(__name__)

router = APIRouter(tags=["Relay"])


@router.websocket("/ws/relay")
async def relay(websocket: WebSocket, hub: BroadcastHub = Depends(get_broadcast_hub)):
    await websocket.accept()
    try:
        client_id = hub.register(websocket)
    except ConnectionRefusedError as e:
        logger.warning(str(e))
        await websocket.close(code=status.WS_1013_TRY_AGAIN_LATER)
        return

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug(f"Relay client {client_id} disconnected")
    finally:
        hub.unregister(client_id)
