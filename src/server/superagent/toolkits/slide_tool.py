import logging
from typing import Any, Dict

from superagent.slides.models import DEFAULT_STYLE, StyleName
from superagent.slides.utils import SlideGenerationError, SlideGenerationService

logger = logging.getLogger(__name__)

SLIDE_GENERATOR_TOOL = "GENERATE_PRESENTATION_SLIDES"
MIN_SLIDES = 1
MAX_SLIDES = 20
DEFAULT_SLIDE_COUNT = 5

SLIDE_GENERATOR_DESCRIPTOR: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": SLIDE_GENERATOR_TOOL,
        "description": "Creates a professional presentation about a topic, with customizable slide count and style.",
        "parameters": {
            "type": "object",
            "properties": {
                "topic": {
                    "type": "string",
                    "description": "The topic of the presentation. Include any specific details or data the slides must cover.",
                },
                "slideCount": {
                    "type": "integer",
                    "minimum": MIN_SLIDES,
                    "maximum": MAX_SLIDES,
                    "default": DEFAULT_SLIDE_COUNT,
                    "description": "Number of slides to generate (1-20)",
                },
                "style": {
                    "type": "string",
                    "enum": [style.value for style in StyleName],
                    "default": DEFAULT_STYLE.value,
                    "description": "The visual style for the presentation.",
                },
            },
            "required": ["topic"],
        },
    },
}

def _slide_count(value: Any) -> int:
    try:
        count = int(value)
    except (TypeError, ValueError):
        return DEFAULT_SLIDE_COUNT
    return min(max(count, MIN_SLIDES), MAX_SLIDES)

async def execute_slide_generator(slide_service: SlideGenerationService, arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Runs the custom slide tool. Failures are reported back to the model rather than raised."""
    topic = arguments.get("topic") or arguments.get("content") or ""
    slide_count = _slide_count(arguments.get("slideCount", DEFAULT_SLIDE_COUNT))
    style = arguments.get("style") or DEFAULT_STYLE.value

    if not topic.strip():
        return {"data": {"error": "A topic is required to generate slides."}, "error": None, "successful": False}

    try:
        slides = await slide_service.generate_from_topic(topic, slide_count, style)
    except SlideGenerationError as e:
        logger.error(f"Slide tool failed for topic '{topic}': {e}")
        return {"data": {"error": str(e)}, "error": None, "successful": False}

    slide_dicts = [slide.model_dump(mode="json") for slide in slides]
    return {
        "data": {
            "slides": slide_dicts,
            "slideCount": len(slide_dicts),
            "topic": slide_dicts[0]["title"] if slide_dicts else topic,
            "style": style,
            "message": f"Successfully generated {len(slide_dicts)} slides.",
        },
        "error": None,
        "successful": True,
    }
