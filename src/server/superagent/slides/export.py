import re
import logging
from typing import Any, Dict, List, Optional

import httpx

from superagent.slides.models import resolve_style

logger = logging.getLogger(__name__)

PPTX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

class ConverterNotConfiguredError(Exception):
    pass

class ConversionFailedError(Exception):
    pass

def presentation_filename(title: Optional[str]) -> str:
    return f"{re.sub(r'[^a-zA-Z0-9]', '_', title or 'presentation')}.pptx"

class PresentationConverter:
    """Client for the external slides-to-PPTX conversion service."""

    def __init__(self, http_client: httpx.AsyncClient, converter_url: Optional[str], timeout: float = 120.0):
        self.http_client = http_client
        self.converter_url = converter_url
        self.timeout = timeout

    async def convert(self, slides: List[Dict[str, Any]], title: Optional[str], style: Optional[str]) -> bytes:
        if not self.converter_url:
            raise ConverterNotConfiguredError("PPT_CONVERTER_URL is not configured.")

        payload = {
            "slides": slides,
            "title": title or "Presentation",
            "style": resolve_style(style).value,
        }
        try:
            response = await self.http_client.post(self.converter_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Presentation conversion failed: {e}", exc_info=True)
            raise ConversionFailedError(str(e)) from e

        logger.info(f"Converted {len(slides)} slides into {len(response.content)} bytes of PPTX")
        return response.content
