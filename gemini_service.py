import asyncio
import logging

import google.generativeai as genai

from app_config import AppConfig

log = logging.getLogger("skillsync.gemini")


class ExternalServiceError(RuntimeError):
    """Gemini call failed, timed out, or returned an unusable payload"""


def _response_text(response):
    """Join the text parts of the first candidate without touching response.text"""
    parts = []
    candidates = getattr(response, "candidates", None) or []
    if candidates:
        content = getattr(candidates[0], "content", None)
        for part in getattr(content, "parts", None) or []:
            text = getattr(part, "text", None)
            if text:
                parts.append(text)
    return "".join(parts).strip()


class GeminiClient:
    """Single-attempt text generation against the Gemini API"""

    def __init__(self, api_key, model_name="gemini-2.0-flash", timeout=20):
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.timeout = timeout
        self._model = genai.GenerativeModel(model_name)

    async def generate(self, prompt, generation_config=None):
        config = genai.types.GenerationConfig(**(generation_config or {}))
        try:
            response = await asyncio.wait_for(
                self._model.generate_content_async(
                    prompt,
                    generation_config=config,
                    request_options={"timeout": self.timeout},
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise ExternalServiceError(f"Gemini call timed out after {self.timeout}s") from e
        except Exception as e:
            raise ExternalServiceError(f"Gemini call failed: {e}") from e

        text = _response_text(response)
        if not text:
            raise ExternalServiceError("Gemini returned no text")
        return text


def get_gemini_client():
    """Client built from config, or None when no GEMINI_API_KEY is set"""
    api_key = AppConfig.gemini_api_key()
    if not api_key:
        return None

    config = AppConfig.load_config()
    return GeminiClient(
        api_key,
        model_name=config["gemini_model"],
        timeout=config["gemini_timeout_seconds"],
    )
