import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient
from superagent.app import app
from superagent.config import USER_ID_COOKIE_NAME
from superagent.dependencies import get_llm_client, get_presentation_converter, get_tool_platform
from superagent.llm import AgentRunResult
from superagent.slides.models import GeneratedDeck

# --- Test User Data ---
TEST_USER_ID = "4820193756"

SAMPLE_DECK = {
    "slides": [
        {"title": "Solar Power in 2024", "content": "Where the industry stands today", "type": "title"},
        {"title": "Why Solar", "content": "Key drivers", "type": "bullet",
         "bulletPoints": ["Falling panel prices", "Policy incentives", "Corporate demand"]},
        {"title": "Cost Curve", "content": "Module prices fell by roughly 90% over the last decade.", "type": "content"},
        {"title": "Risks", "content": "What could slow adoption", "type": "bullet",
         "bulletPoints": ["Grid interconnection queues", "Supply chain concentration"]},
        {"title": "Key Takeaways", "content": "Solar is now the cheapest new electricity in most markets.", "type": "content"},
    ]
}

def tool_descriptor(name: str, description: str = "") -> dict:
    return {"type": "function", "function": {"name": name, "description": description, "parameters": {"type": "object", "properties": {}}}}

# --- Fixtures ---

@pytest.fixture(scope="function")
def sample_deck() -> GeneratedDeck:
    return GeneratedDeck.model_validate(SAMPLE_DECK)

@pytest.fixture(scope="function")
def mock_llm(sample_deck):
    """Stands in for the LLMClient stored on app.state."""
    mock = MagicMock()
    mock.generate_text = AsyncMock(return_value=AgentRunResult(text="Hello! How can I help you today?", steps=1))
    mock.generate_object = AsyncMock(return_value=sample_deck)
    return mock

@pytest.fixture(scope="function")
def mock_platform():
    """Stands in for the Composio-backed ToolPlatform."""
    mock = MagicMock()
    mock.get_tools = AsyncMock(return_value={})
    mock.execute = AsyncMock(return_value={"data": {"ok": True}, "error": None, "successful": True})
    mock.initiate_connection = AsyncMock(return_value=SimpleNamespace(
        id="ca_test_connection", redirect_url="https://auth.example.com/authorize?state=abc"
    ))
    mock.get_connection = AsyncMock(return_value=SimpleNamespace(status="ACTIVE"))
    return mock

@pytest.fixture(scope="function")
def mock_converter():
    mock = MagicMock()
    mock.convert = AsyncMock(return_value=b"PK\x03\x04fake-pptx")
    return mock

@pytest.fixture(scope="function")
def override_dependencies(mock_llm, mock_platform, mock_converter):
    app.dependency_overrides[get_llm_client] = lambda: mock_llm
    app.dependency_overrides[get_tool_platform] = lambda: mock_platform
    app.dependency_overrides[get_presentation_converter] = lambda: mock_converter
    yield
    # Clean up overrides after test
    app.dependency_overrides = {}

@pytest.fixture(scope="function")
def client(override_dependencies):
    """TestClient for a browser that already carries the identity cookie."""
    with TestClient(app, cookies={USER_ID_COOKIE_NAME: TEST_USER_ID}) as test_client:
        yield test_client

@pytest.fixture(scope="function")
def anonymous_client(override_dependencies):
    """TestClient for a browser that has never signed in."""
    with TestClient(app) as test_client:
        yield test_client
