from app.core.config import Settings
from app.services.prompts import (
    FALLBACK_TEMPLATES,
    GENERATION_CONFIG,
    GENERIC_FALLBACK,
    PROMPT_TEMPLATES,
)
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
import httpx
import logging

logger = logging.getLogger(__name__)

UNKNOWN_BIRTH_PLACE = "an unspecified place"


class ContentSource(str, Enum):
    GENERATED = "generated"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class GeneratedContent:
    text: str
    source: ContentSource


class _TemplateParams(dict):
    def __missing__(self, key):
        return ""


def template_params(params: Optional[Dict[str, Any]]) -> _TemplateParams:
    """Aplanar los parámetros del servicio para interpolarlos en las plantillas"""
    values = _TemplateParams(params or {})
    birth_data = values.pop("birth_data", None)
    if isinstance(birth_data, dict):
        values.setdefault("birth_date", birth_data.get("birth_date"))
        values.setdefault("birth_place", birth_data.get("birth_place"))
    if not values.get("birth_place"):
        values["birth_place"] = UNKNOWN_BIRTH_PLACE
    return values


class ContentGenerator:
    """Genera texto con Gemini y recurre a plantillas fijas si falla"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-pro",
        api_base: str = "https://generativelanguage.googleapis.com/v1",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "ContentGenerator":
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            api_base=settings.gemini_api_base,
            timeout=settings.gemini_timeout,
        )

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def generate(self, service_type: str, params: Optional[Dict[str, Any]] = None) -> GeneratedContent:
        """Nunca lanza: cualquier fallo se sustituye por el texto de respaldo"""
        values = template_params(params)

        if self.enabled and service_type in PROMPT_TEMPLATES:
            try:
                prompt = PROMPT_TEMPLATES[service_type].format_map(values)
                text = await self._call_gemini(service_type, prompt)
                logger.info("Generated %s content with %s", service_type, self.model)
                return GeneratedContent(text=text, source=ContentSource.GENERATED)
            except Exception as e:
                logger.error("Gemini API error for %s: %s", service_type, e)
        else:
            logger.info("Gemini not configured, serving fallback %s content", service_type)

        return GeneratedContent(
            text=self.fallback(service_type, values),
            source=ContentSource.FALLBACK,
        )

    def fallback(self, service_type: str, params: Optional[Dict[str, Any]] = None) -> str:
        template = FALLBACK_TEMPLATES.get(service_type)
        if template is None:
            return GENERIC_FALLBACK
        values = params if isinstance(params, _TemplateParams) else template_params(params)
        return template.format_map(values)

    async def _call_gemini(self, service_type: str, prompt: str) -> str:
        temperature, max_tokens = GENERATION_CONFIG[service_type]
        url = f"{self.api_base}/models/{self.model}:generateContent"
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_tokens,
            },
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(url, params={"key": self.api_key}, json=payload)

        response.raise_for_status()
        data = response.json()
        text = data["candidates"][0]["content"]["parts"][0]["text"]

        if not isinstance(text, str) or not text.strip():
            raise ValueError("Empty response from Gemini")
        return text
