# tattoo_workshop/core/gemini_client.py
"""Thin wrapper around the Gemini generative-text API."""

import logging
import threading

import google.generativeai as genai

from tattoo_workshop.core.config import get_settings

logger = logging.getLogger(__name__)

# genai.configure sets a process-wide key; hold this until the call returns.
_configure_lock = threading.Lock()


class GeminiError(Exception):
    """Raised when the Gemini call fails; message is the upstream error text."""


def generate_text(api_key: str, prompt: str, model_name: str | None = None) -> str:
    """
    Send `prompt` to Gemini and return the generated text.

    The API key is per call (the studio stores its own key in settings),
    so the client is configured on every request. Calls are serialized
    because the SDK keeps that key in module state.

    Raises:
        GeminiError: on any error from the SDK or an empty response.
    """
    model_name = model_name or get_settings().GEMINI_MODEL
    try:
        with _configure_lock:
            genai.configure(api_key=api_key)
            model = genai.GenerativeModel(model_name)
            response = model.generate_content(prompt)
        text = (response.text or "").strip()
    except Exception as e:
        err = str(e).strip() or "Unknown error"
        logger.error(f"Gemini request failed ({model_name}): {err}")
        raise GeminiError(err) from e

    if not text:
        raise GeminiError("Empty response from Gemini")
    return text
