"""
WebSocket relay between a browser client and the Gemini Live API.

The browser cannot hold the API key, so it talks to this relay. The relay
opens the upstream connection, sends the setup message, then copies frames
in both directions until either side closes.
"""

from __future__ import annotations

import asyncio
import json
import logging

import websockets
from fastapi import WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)

UPSTREAM_ERROR_MESSAGE = {"error": "Error connecting to Gemini"}


def build_upstream_url(base_url: str, api_key: str) -> str:
    return f"{base_url}?key={api_key}"


async def _client_to_upstream(client: WebSocket, upstream) -> None:
    while True:
        message = await client.receive()
        if message["type"] == "websocket.disconnect":
            logger.info("Client disconnected")
            return
        if message.get("text") is not None:
            await upstream.send(message["text"])
        elif message.get("bytes") is not None:
            await upstream.send(message["bytes"])


async def _upstream_to_client(upstream, client: WebSocket) -> None:
    async for message in upstream:
        if isinstance(message, bytes):
            await client.send_bytes(message)
        else:
            await client.send_text(message)
    logger.info("Gemini WebSocket closed")


async def relay(
    client: WebSocket,
    upstream_url: str,
    setup_message: dict,
    connect=None,
) -> None:
    """
    Runs one relay session. `client` must already be accepted.

    `connect` opens the upstream socket and defaults to `websockets.connect`.
    """
    connect = connect or websockets.connect
    try:
        async with connect(upstream_url) as upstream:
            logger.info("Connected to Gemini Live API")
            await upstream.send(json.dumps(setup_message))

            tasks = [
                asyncio.create_task(_client_to_upstream(client, upstream)),
                asyncio.create_task(_upstream_to_client(upstream, client)),
            ]
            done, pending = await asyncio.wait(
                tasks, return_when=asyncio.FIRST_COMPLETED
            )
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            for task in done:
                exc = task.exception()
                if exc is None or isinstance(
                    exc, (WebSocketDisconnect, websockets.ConnectionClosedOK)
                ):
                    continue
                if isinstance(exc, (OSError, websockets.WebSocketException)):
                    # Upstream dropped mid-session; the client gets the error frame.
                    raise exc
                logger.error("Relay task failed: %s", exc, exc_info=exc)
    except (OSError, websockets.WebSocketException) as e:
        logger.error("Gemini WebSocket error: %s", e)
        try:
            await client.send_text(json.dumps(UPSTREAM_ERROR_MESSAGE))
        except (RuntimeError, WebSocketDisconnect):
            pass

    if (
        client.application_state != WebSocketState.DISCONNECTED
        and client.client_state != WebSocketState.DISCONNECTED
    ):
        await client.close()
