import pytest
from fastapi.testclient import TestClient

from conftest import TEST_USER_ID
from superagent.llm import StructuredOutputError
from superagent.slides.export import PPTX_MEDIA_TYPE, ConversionFailedError, ConverterNotConfiguredError

# --- Test /api/generate-slides ---

def test_generate_slides_from_content(client: TestClient, mock_llm):
    response = client.post("/api/generate-slides", json={"content": "# Q3 Review\n- Revenue up 12%", "style": "minimal"})

    assert response.status_code == 200
    data = response.json()
    assert data["hasSlides"] is True
    assert len(data["slides"]) == 5
    assert data["slides"][0]["type"] == "title"
    assert "# Q3 Review" in mock_llm.generate_object.await_args.args[0]

def test_generate_slides_requires_content(client: TestClient, mock_llm):
    response = client.post("/api/generate-slides", json={"content": "   "})

    assert response.status_code == 400
    assert response.json() == {"error": "Content is required to generate slides."}
    mock_llm.generate_object.assert_not_awaited()

def test_generate_slides_schema_failure(client: TestClient, mock_llm):
    mock_llm.generate_object.side_effect = StructuredOutputError("slides missing")

    response = client.post("/api/generate-slides", json={"content": "# Outline"})

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to generate slides."

@pytest.mark.parametrize("slide_count", [-3, 0, 21])
def test_generate_slides_rejects_slide_count(client: TestClient, mock_llm, slide_count):
    response = client.post("/api/generate-slides", json={"content": "# Outline", "slideCount": slide_count})

    assert response.status_code == 422
    mock_llm.generate_object.assert_not_awaited()

# --- Test /api/generate-slides/topic ---

def test_generate_slides_from_topic(client: TestClient):
    response = client.post("/api/generate-slides/topic", json={
        "topic": "Solar power", "slideCount": 5, "style": "academic", "userId": TEST_USER_ID,
    })

    assert response.status_code == 200
    data = response.json()
    assert data["userId"] == TEST_USER_ID
    assert [slide["title"] for slide in data["slides"]][0] == "Solar Power in 2024"

def test_generate_slides_from_topic_requires_user(client: TestClient, mock_llm):
    response = client.post("/api/generate-slides/topic", json={"topic": "Solar power"})

    assert response.status_code == 401
    mock_llm.generate_object.assert_not_awaited()

def test_generate_slides_from_topic_requires_topic(client: TestClient):
    response = client.post("/api/generate-slides/topic", json={"topic": "", "userId": TEST_USER_ID})
    assert response.status_code == 400

def test_generate_slides_from_topic_rejects_slide_count(client: TestClient):
    response = client.post("/api/generate-slides/topic", json={"topic": "Solar", "slideCount": 50, "userId": TEST_USER_ID})
    assert response.status_code == 422

# --- Test /api/convert-to-ppt ---

def test_convert_to_ppt(client: TestClient, mock_converter):
    slides = [{"title": "Solar", "content": "Overview", "type": "title"}]

    response = client.post("/api/convert-to-ppt", json={"slides": slides, "title": "Q3 Review", "style": "creative"})

    assert response.status_code == 200
    assert response.content == b"PK\x03\x04fake-pptx"
    assert response.headers["content-type"] == PPTX_MEDIA_TYPE
    assert response.headers["content-disposition"] == 'attachment; filename="Q3_Review.pptx"'
    mock_converter.convert.assert_awaited_once_with(slides, "Q3 Review", "creative")

def test_convert_to_ppt_requires_slides(client: TestClient, mock_converter):
    response = client.post("/api/convert-to-ppt", json={"slides": []})

    assert response.status_code == 400
    mock_converter.convert.assert_not_awaited()

def test_convert_to_ppt_not_configured(client: TestClient, mock_converter):
    mock_converter.convert.side_effect = ConverterNotConfiguredError("PPT_CONVERTER_URL is not configured.")
    response = client.post("/api/convert-to-ppt", json={"slides": [{"title": "Solar"}]})
    assert response.status_code == 503

def test_convert_to_ppt_converter_error(client: TestClient, mock_converter):
    mock_converter.convert.side_effect = ConversionFailedError("500 Internal Server Error")
    response = client.post("/api/convert-to-ppt", json={"slides": [{"title": "Solar"}]})
    assert response.status_code == 502
