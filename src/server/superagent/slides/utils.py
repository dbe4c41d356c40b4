import logging
from typing import List, Optional

from superagent.llm import LLMClient, LLMProviderDownError, StructuredOutputError
from superagent.slides.models import GeneratedDeck, Slide, resolve_style
from superagent.slides.prompts import (
    CONCLUSION_SLIDE_LINE, CONTENT_SLIDE_LINE, CONTENT_SLIDES_LINE, SLIDE_COUNT_HINT,
    SLIDE_SCHEMA_INSTRUCTIONS, SLIDES_FROM_CONTENT_PROMPT, SLIDES_FROM_TOPIC_PROMPT,
)
from superagent.slides.render import decorate_slides

logger = logging.getLogger(__name__)

class SlideGenerationError(Exception):
    """The model call failed or returned slides that do not match the schema."""
    pass

def body_structure(slide_count: int) -> str:
    """Structure lines for the slides after the title slide; a single-slide deck is just the title."""
    if slide_count < 2:
        return ""
    lines = ""
    if slide_count == 3:
        lines += CONTENT_SLIDE_LINE
    elif slide_count > 3:
        lines += CONTENT_SLIDES_LINE.format(last_content_slide=slide_count - 1)
    return lines + CONCLUSION_SLIDE_LINE.format(slide_count=slide_count)

class SlideGenerationService:
    """Turns a topic or an outline into a rendered slide deck using structured generation."""

    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def _generate(self, prompt: str, style: str) -> List[Slide]:
        try:
            deck = await self.llm.generate_object(prompt, GeneratedDeck)
        except (LLMProviderDownError, StructuredOutputError) as e:
            raise SlideGenerationError(f"Failed to generate slides: {e}") from e
        return decorate_slides(deck.to_slides(), style)

    async def generate_from_topic(self, topic: str, slide_count: int = 5, style: Optional[str] = None) -> List[Slide]:
        resolved_style = resolve_style(style).value
        prompt = SLIDES_FROM_TOPIC_PROMPT.format(
            topic=topic,
            slide_count=slide_count,
            body_structure=body_structure(slide_count),
            style=resolved_style,
            schema=SLIDE_SCHEMA_INSTRUCTIONS,
        )
        logger.info(f"Generating {slide_count} '{resolved_style}' slides for topic '{topic}'")
        slides = await self._generate(prompt, resolved_style)
        if len(slides) != slide_count:
            logger.warning(f"Requested {slide_count} slides for '{topic}' but the model returned {len(slides)}.")
        return slides

    async def generate_from_content(self, content: str, style: Optional[str] = None,
                                    slide_count: Optional[int] = None) -> List[Slide]:
        resolved_style = resolve_style(style).value
        count_hint = SLIDE_COUNT_HINT.format(slide_count=slide_count) if slide_count else ""
        prompt = SLIDES_FROM_CONTENT_PROMPT.format(
            content=content,
            count_hint=count_hint,
            schema=SLIDE_SCHEMA_INSTRUCTIONS,
        )
        logger.info(f"Generating '{resolved_style}' slides from {len(content)} characters of content")
        return await self._generate(prompt, resolved_style)
