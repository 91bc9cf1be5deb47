import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, ValidationError

from countrysearch.api.deps import get_country_client
from countrysearch.core.config import Settings, get_settings
from countrysearch.schemas.live import InputEvent, client_event_adapter
from countrysearch.services.country_client import CountryClient, FetchError, HttpStatusError
from countrysearch.services.page import DETAIL_TARGET, LIST_TARGET, Container, Notifier
from countrysearch.services.search_controller import SearchController

logger = logging.getLogger(__name__)

router = APIRouter()


async def _pump(websocket: WebSocket, outbox: "asyncio.Queue[BaseModel]"):
    """Forward patches and notifications to the browser in publish order."""
    while True:
        message = await outbox.get()
        await websocket.send_json(message.model_dump())


@router.websocket("/live")
async def live_search(
    websocket: WebSocket,
    client: CountryClient = Depends(get_country_client),
    settings: Settings = Depends(get_settings),
):
    """
    One search page session.
    Receives: {"type": "input", "value": "..."} and {"type": "select", "id": "..."}
    Sends: {"type": "patch", ...} and {"type": "notify", ...}
    """
    await websocket.accept()
    outbox: asyncio.Queue = asyncio.Queue()
    controller = SearchController(
        client,
        Container(LIST_TARGET, outbox.put_nowait),
        Container(DETAIL_TARGET, outbox.put_nowait),
        Notifier(outbox.put_nowait),
        settings=settings,
    )
    sender = asyncio.create_task(_pump(websocket, outbox))
    selections = set()
    logger.info("[LIVE] session opened")

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))

            raw = message.get("text")
            if raw is None:
                logger.warning("[LIVE] ignoring non-text frame")
                continue

            try:
                event = client_event_adapter.validate_json(raw)
            except ValidationError as e:
                logger.warning("[LIVE] ignoring invalid message: %s", e.errors()[:1])
                continue

            if isinstance(event, InputEvent):
                controller.on_input(event.value)
            else:
                task = asyncio.create_task(controller.on_select(event.id))
                selections.add(task)
                task.add_done_callback(selections.discard)
    except WebSocketDisconnect:
        logger.info("[LIVE] session closed")
    finally:
        controller.close()
        sender.cancel()
        for task in list(selections):
            task.cancel()
        # Retrieve failures of the sender (e.g. a send on a dead socket)
        await asyncio.gather(sender, *selections, return_exceptions=True)


@router.get("/countries")
async def lookup_countries(
    name: str, client: CountryClient = Depends(get_country_client)
) -> List[Dict[str, Any]]:
    """Debug endpoint: raw lookup without the live page."""
    try:
        records = await client.search(name)
    except HttpStatusError as e:
        status = 404 if e.status_code == 404 else 502
        raise HTTPException(status_code=status, detail=str(e))
    except FetchError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return [record.model_dump() for record in records]


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "Country Search",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
