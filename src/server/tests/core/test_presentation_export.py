import json
import httpx
import pytest

from superagent.slides.export import (
    ConversionFailedError, ConverterNotConfiguredError, PresentationConverter, presentation_filename,
)

CONVERTER_URL = "http://converter.local/convert"
SLIDES = [{"title": "Solar", "content": "Overview", "type": "title"}]

def test_presentation_filename():
    assert presentation_filename("Q3 Review: 2024") == "Q3_Review__2024.pptx"
    assert presentation_filename(None) == "presentation.pptx"

@pytest.mark.asyncio
async def test_convert_posts_slides():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["payload"] = json.loads(request.content)
        return httpx.Response(200, content=b"PK\x03\x04pptx-bytes")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        converter = PresentationConverter(http_client, CONVERTER_URL, timeout=5)
        pptx_bytes = await converter.convert(SLIDES, "Solar Deck", "neon")

    assert pptx_bytes == b"PK\x03\x04pptx-bytes"
    assert captured["url"] == CONVERTER_URL
    assert captured["payload"] == {"slides": SLIDES, "title": "Solar Deck", "style": "professional"}

@pytest.mark.asyncio
async def test_convert_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "boom"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        converter = PresentationConverter(http_client, CONVERTER_URL)
        with pytest.raises(ConversionFailedError):
            await converter.convert(SLIDES, None, None)

@pytest.mark.asyncio
async def test_convert_without_url():
    async with httpx.AsyncClient() as http_client:
        converter = PresentationConverter(http_client, None)
        with pytest.raises(ConverterNotConfiguredError):
            await converter.convert(SLIDES, "Solar", "professional")
