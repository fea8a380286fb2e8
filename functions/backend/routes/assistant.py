"""
AI assistant endpoints: text chat, image analysis and the live-audio relay.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket

from backend import live_relay
from backend.auth import AuthError, AuthenticatedUser, get_current_user, verify_token
from backend.config import Settings, get_settings
from backend.schemas import AssistantChatRequest, AssistantResponse, ImageAnalysisRequest
from models import gemini
from shared.constants import DEFAULT_IMAGE_ANALYSIS_PROMPT

logger = logging.getLogger(__name__)

router = APIRouter()

DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,(?P<data>.*)$", re.DOTALL)
DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"

# Close code for a rejected WebSocket handshake (policy violation).
WS_POLICY_VIOLATION = 1008


def decode_image(image: str) -> tuple[bytes, str]:
    """
    Accepts a data URL ("data:image/png;base64,...") or bare base64.

    Returns the raw bytes and the MIME type.
    """
    mime_type = DEFAULT_IMAGE_MIME_TYPE
    data = image.strip()
    match = DATA_URL_PATTERN.match(data)
    if match:
        mime_type = match.group("mime")
        data = match.group("data")
    try:
        image_bytes = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=400, detail="Invalid image data")
    if not image_bytes:
        raise HTTPException(status_code=400, detail="Invalid image data")
    return image_bytes, mime_type


@router.post("/gemini-chat", response_model=AssistantResponse)
def assistant_chat(
    payload: AssistantChatRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    if not payload.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")
    history = [turn.model_dump() for turn in payload.history or []]
    try:
        text = gemini.call_chat(
            payload.message,
            history,
            model=settings.gemini_chat_model,
            api_key=settings.gemini_api_key,
        )
    except gemini.GeminiInvalidResponseException as e:
        logger.error("Error in gemini-chat: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    return AssistantResponse(response=text)


@router.post("/gemini-image-analysis", response_model=AssistantResponse)
def analyze_image(
    payload: ImageAnalysisRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    image_bytes, mime_type = decode_image(payload.image)
    prompt = (payload.prompt or "").strip() or DEFAULT_IMAGE_ANALYSIS_PROMPT
    try:
        text = gemini.call_predict_with_image(
            prompt,
            image_bytes,
            mime_type=mime_type,
            model=settings.gemini_chat_model,
            api_key=settings.gemini_api_key,
        )
    except gemini.GeminiInvalidResponseException as e:
        logger.error("Error in gemini-image-analysis: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    return AssistantResponse(response=text)


@router.websocket("/gemini-live-audio")
async def live_audio(
    websocket: WebSocket,
    token: str | None = Query(None),
    settings: Settings = Depends(get_settings),
):
    if not token:
        await websocket.close(code=WS_POLICY_VIOLATION)
        return
    try:
        user = verify_token(token, settings)
    except AuthError as e:
        logger.info("Rejected live-audio connection: %s", e.message)
        await websocket.close(code=WS_POLICY_VIOLATION)
        return

    await websocket.accept()
    logger.info("Client %s connected to relay", user.id)
    await live_relay.relay(
        websocket,
        live_relay.build_upstream_url(settings.gemini_live_url, settings.gemini_api_key or ""),
        gemini.build_live_setup(
            model=settings.gemini_live_model, voice_name=settings.gemini_live_voice
        ),
    )
