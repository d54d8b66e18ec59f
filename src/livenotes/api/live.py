"""WebSocket endpoint for live note snapshots."""

import asyncio
import contextlib
import uuid
from typing import Optional

from fastapi import APIRouter, WebSocket, status

from ..core.logging import get_logger
from ..state import get_app_state

router = APIRouter(prefix="/live", tags=["live"])
logger = get_logger("live")


def _connection_token(websocket: WebSocket) -> Optional[str]:
    """Token from ``?token=`` or an ``Authorization: Bearer`` header."""
    token = websocket.query_params.get("token")
    if token:
        return token
    state = get_app_state(websocket)
    return state.access.extract_bearer(websocket.headers.get("authorization"))


@router.websocket("/notes")
async def notes_stream(websocket: WebSocket):
    """
    Live note snapshots.

    The current list is pushed right after connecting, then again after
    every create, update or delete. Inbound messages are ignored.
    """
    state = get_app_state(websocket)
    identity = state.access.identify_connection(_connection_token(websocket))
    if identity.is_rejected:
        logger.info("Live connection rejected")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    connection_id = uuid.uuid4().hex
    subscriber = state.hub.connect(connection_id, identity, websocket.send_json)
    delivery = asyncio.create_task(state.hub.serve(subscriber))

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        state.hub.disconnect(connection_id)
        delivery.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await delivery
