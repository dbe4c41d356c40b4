import pytest
from pydantic import ValidationError
from unittest.mock import AsyncMock, MagicMock

from superagent.llm import LLMProviderDownError, StructuredOutputError
from superagent.slides.models import PALETTES, GeneratedDeck, SlideKind, StyleName
from superagent.slides.utils import SlideGenerationError, SlideGenerationService, body_structure
from superagent.toolkits.slide_tool import (
    MAX_SLIDES, SLIDE_GENERATOR_DESCRIPTOR, SLIDE_GENERATOR_TOOL, execute_slide_generator,
)

# --- SlideGenerationService ---

@pytest.mark.asyncio
async def test_generate_from_topic_returns_rendered_deck(mock_llm):
    service = SlideGenerationService(mock_llm)
    slides = await service.generate_from_topic("Solar power", 5, "professional")

    assert len(slides) == 5
    assert slides[0].type == SlideKind.TITLE
    assert all(slide.html and slide.html.startswith("<style>") for slide in slides)

    prompt, schema = mock_llm.generate_object.await_args.args
    assert schema is GeneratedDeck
    assert "Solar power" in prompt
    assert "5" in prompt

@pytest.mark.asyncio
async def test_generate_from_topic_uses_requested_style(mock_llm):
    slides = await SlideGenerationService(mock_llm).generate_from_topic("Solar power", 5, "creative")
    assert PALETTES[StyleName.CREATIVE].background in slides[0].html

@pytest.mark.asyncio
async def test_slide_count_mismatch_is_returned_as_is(mock_llm, sample_deck):
    mock_llm.generate_object.return_value = GeneratedDeck(slides=sample_deck.slides[:3])
    slides = await SlideGenerationService(mock_llm).generate_from_topic("Solar power", 5)
    assert len(slides) == 3

@pytest.mark.asyncio
async def test_generate_from_content_passes_outline(mock_llm):
    outline = "# Q3 Review\n- Revenue up 12%\n- Churn down"
    slides = await SlideGenerationService(mock_llm).generate_from_content(outline)

    assert len(slides) == 5
    prompt = mock_llm.generate_object.await_args.args[0]
    assert outline in prompt

@pytest.mark.asyncio
@pytest.mark.parametrize("error", [StructuredOutputError("bad shape"), LLMProviderDownError("down")])
async def test_generation_failures_raise(mock_llm, error):
    mock_llm.generate_object.side_effect = error
    with pytest.raises(SlideGenerationError):
        await SlideGenerationService(mock_llm).generate_from_topic("Solar power")

def test_generated_deck_requires_at_least_one_slide():
    with pytest.raises(ValidationError):
        GeneratedDeck.model_validate({"slides": []})

def test_generated_bullet_slide_requires_bullets():
    with pytest.raises(ValidationError):
        GeneratedDeck.model_validate({"slides": [{"title": "Agenda", "content": "", "type": "bullet"}]})

def test_generated_deck_rejects_unknown_slide_type():
    with pytest.raises(ValidationError):
        GeneratedDeck.model_validate({"slides": [{"title": "x", "content": "y", "type": "image"}]})

# --- Custom slide tool ---

def test_slide_tool_descriptor_shape():
    function = SLIDE_GENERATOR_DESCRIPTOR["function"]
    assert function["name"] == SLIDE_GENERATOR_TOOL
    assert function["parameters"]["required"] == ["topic"]
    assert set(function["parameters"]["properties"]["style"]["enum"]) == {s.value for s in StyleName}

@pytest.mark.asyncio
async def test_slide_tool_success(mock_llm):
    result = await execute_slide_generator(SlideGenerationService(mock_llm), {"topic": "Solar power", "slideCount": 5})

    assert result["successful"] is True
    assert result["error"] is None
    assert result["data"]["slideCount"] == 5
    assert result["data"]["topic"] == "Solar Power in 2024"
    assert result["data"]["style"] == "professional"
    assert len(result["data"]["slides"]) == 5

@pytest.mark.asyncio
async def test_slide_tool_clamps_slide_count():
    service = MagicMock()
    service.generate_from_topic = AsyncMock(return_value=[])

    await execute_slide_generator(service, {"topic": "Solar power", "slideCount": 99})
    service.generate_from_topic.assert_awaited_once_with("Solar power", MAX_SLIDES, "professional")

@pytest.mark.asyncio
async def test_slide_tool_without_topic_reports_failure():
    service = MagicMock()
    service.generate_from_topic = AsyncMock()

    result = await execute_slide_generator(service, {"topic": "   "})
    assert result["successful"] is False
    assert "topic" in result["data"]["error"]
    service.generate_from_topic.assert_not_awaited()

@pytest.mark.asyncio
async def test_slide_tool_reports_generation_failure(mock_llm):
    mock_llm.generate_object.side_effect = StructuredOutputError("bad shape")
    result = await execute_slide_generator(SlideGenerationService(mock_llm), {"topic": "Solar power"})

    assert result["successful"] is False
    assert "bad shape" in result["data"]["error"]

# --- Topic prompt structure ---

def test_body_structure_for_small_decks():
    assert body_structure(1) == ""
    assert body_structure(2) == "- Slide 2: Strong conclusion with key takeaways and next steps.\n"
    three = body_structure(3)
    assert three.startswith("- Slide 2: Content slide")
    assert "- Slide 3: Strong conclusion" in three
    assert "Slides 2-" not in three

def test_body_structure_for_regular_decks():
    structure = body_structure(6)
    assert "- Slides 2-5: Content slides" in structure
    assert "- Slide 6: Strong conclusion" in structure

@pytest.mark.asyncio
async def test_single_slide_prompt_asks_only_for_title(mock_llm, sample_deck):
    mock_llm.generate_object.return_value = GeneratedDeck(slides=sample_deck.slides[:1])

    await SlideGenerationService(mock_llm).generate_from_topic("Solar power", 1)

    prompt = mock_llm.generate_object.await_args.args[0]
    assert "- Slide 1: Title slide" in prompt
    assert "conclusion" not in prompt.lower()
    assert "Slides 2-" not in prompt
