"""
WebSocket manager relaying sync messages to connected browsers
"""

import asyncio
import json
import logging
from typing import Callable, List
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from oscar_party.services.event_channel import SyncMessage
from oscar_party.services.party_service import PartyService

logger = logging.getLogger(__name__)

class WebSocketManager:
    """Manages WebSocket connections listening for sync messages"""

    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        """Accept WebSocket connection"""
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.info(f"WebSocket connected. Total connections: {len(self.active_connections)}")

    def disconnect(self, websocket: WebSocket):
        try:
            self.active_connections.remove(websocket)
            logger.info(f"WebSocket disconnected. Remaining connections: {len(self.active_connections)}")
        except ValueError:
            # WebSocket was not in the list
            pass

    async def send_personal_message(self, message: dict, websocket: WebSocket):
        """Send message to specific WebSocket"""
        try:
            await websocket.send_text(json.dumps(message))
        except Exception as e:
            logger.error(f"Error sending personal message: {e}")

    async def broadcast(self, message: dict):
        """Broadcast message to every connected WebSocket"""
        # Copy, the list may change while awaiting sends
        connections = self.active_connections.copy()

        disconnected = []
        for websocket in connections:
            try:
                await websocket.send_text(json.dumps(message))
            except Exception as e:
                logger.error(f"Error broadcasting to websocket: {e}")
                disconnected.append(websocket)

        for websocket in disconnected:
            self.disconnect(websocket)

    def get_connection_count(self) -> int:
        return len(self.active_connections)

# Global WebSocket manager instance
websocket_manager = WebSocketManager()

def relay_sync_messages(
    service: PartyService,
    loop: asyncio.AbstractEventLoop,
    manager: WebSocketManager = websocket_manager
) -> Callable[[], None]:
    """Forward every sync message to the sockets; returns the unsubscribe.

    Messages may be published from remote-listener threads, so the
    broadcast is scheduled on the server's event loop.
    """
    def forward(message: SyncMessage):
        if loop.is_closed():
            return
        asyncio.run_coroutine_threadsafe(manager.broadcast(message.to_dict()), loop)

    return service.on_sync(forward)

# Router for WebSocket endpoints
router = APIRouter()

@router.websocket("/sync")
async def websocket_endpoint(websocket: WebSocket):
    """WebSocket endpoint for live party updates"""
    await websocket_manager.connect(websocket)

    try:
        welcome_message = {
            "type": "connection",
            "message": "Connected to party sync",
            "connection_count": websocket_manager.get_connection_count()
        }
        await websocket_manager.send_personal_message(welcome_message, websocket)

        while True:
            data = await websocket.receive_text()

            try:
                client_message = json.loads(data)
            except json.JSONDecodeError:
                logger.warning(f"Invalid JSON received from WebSocket: {data}")
                continue

            # Handle heartbeat/ping
            if isinstance(client_message, dict) and client_message.get("type") == "ping":
                pong_message = {
                    "type": "pong",
                    "timestamp": client_message.get("timestamp")
                }
                await websocket_manager.send_personal_message(pong_message, websocket)

    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
    finally:
        websocket_manager.disconnect(websocket)

@router.get("/stats")
async def websocket_stats():
    """Get WebSocket connection statistics (for debugging)"""
    return {"total_connections": websocket_manager.get_connection_count()}
