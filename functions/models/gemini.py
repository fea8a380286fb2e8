# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

import time
import logging
from google import genai
from google.genai import types
from models import api_config
from models import prompts
from typing import Iterable, List, Mapping

logger = logging.getLogger(__name__)

API_KEY_LOGGING_MESSAGE = "Ran with user-specified API key"
DEFAULT_MODEL = "gemini-2.5-flash"

CHAT_TEMPERATURE = 0.9
CHAT_TOP_K = 40
CHAT_TOP_P = 0.95
CHAT_MAX_OUTPUT_TOKENS = 8192


class GeminiInvalidResponseException(Exception):
    pass


def _make_client(api_key: str | None) -> genai.Client:
    if not api_key:
        api_key = api_config.DEFAULT_API_KEY
    else:
        logger.info(API_KEY_LOGGING_MESSAGE)
    return genai.Client(api_key=api_key)


def _truncate(text: str, limit: int = 200) -> str:
    return (text[:limit] + "...") if len(text) > limit else text


def build_chat_contents(
    message: str, history: Iterable[Mapping[str, str]] | None = None
) -> List[types.Content]:
    """
    Converts the client's chat history into Gemini turns.

    The client labels its own turns "assistant"; Gemini calls them "model".
    Every other role is sent as "user". The new message is always last.
    """
    contents = []
    for turn in history or []:
        role = "model" if turn.get("role") == "assistant" else "user"
        contents.append(
            types.Content(role=role, parts=[types.Part(text=turn.get("content", ""))])
        )
    contents.append(types.Content(role="user", parts=[types.Part(text=message)]))
    return contents


def _chat_config(system_instruction: str) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        system_instruction=system_instruction,
        temperature=CHAT_TEMPERATURE,
        top_k=CHAT_TOP_K,
        top_p=CHAT_TOP_P,
        max_output_tokens=CHAT_MAX_OUTPUT_TOKENS,
    )


def call_chat(
    message: str,
    history: Iterable[Mapping[str, str]] | None = None,
    model=DEFAULT_MODEL,
    api_key: str | None = None,
    system_instruction: str = prompts.ASSISTANT_SYSTEM_INSTRUCTION,
) -> str:
    """Sends one assistant turn, with prior history, and returns the reply text."""
    client = _make_client(api_key)
    start_time = time.time()
    logger.info("Calling Gemini chat, message: '%s'", _truncate(message))

    response = client.models.generate_content(
        model=model,
        contents=build_chat_contents(message, history),
        config=_chat_config(system_instruction),
    )
    logger.info("Gemini chat call took: %.2fs", time.time() - start_time)
    if not response.text:
        raise GeminiInvalidResponseException("Gemini returned no text")
    return response.text


def call_predict_with_image(
    prompt: str,
    image_bytes: bytes,
    mime_type: str = "image/jpeg",
    model=DEFAULT_MODEL,
    api_key: str | None = None,
    system_instruction: str = prompts.ASSISTANT_SYSTEM_INSTRUCTION,
) -> str:
    """Calls Gemini with a prompt and an image."""
    client = _make_client(api_key)
    start_time = time.time()
    logger.info(
        "Calling Gemini with image (%s, %d bytes), prompt: '%s'",
        mime_type,
        len(image_bytes),
        _truncate(prompt),
    )
    response = client.models.generate_content(
        model=model,
        contents=[
            types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
            prompt,
        ],
        config=_chat_config(system_instruction),
    )
    logger.info("Gemini image call took: %.2fs", time.time() - start_time)
    if not response.text:
        raise GeminiInvalidResponseException("Gemini returned no text")
    return response.text


def build_live_setup(
    model: str,
    voice_name: str,
    system_instruction: str = prompts.LIVE_SYSTEM_INSTRUCTION,
) -> dict:
    """First message sent on a Live API connection, before any client audio."""
    return {
        "setup": {
            "model": model,
            "generation_config": {
                "response_modalities": ["AUDIO"],
                "speech_config": {
                    "voice_config": {
                        "prebuilt_voice_config": {"voice_name": voice_name}
                    }
                },
            },
            "system_instruction": {"parts": [{"text": system_instruction}]},
        }
    }
