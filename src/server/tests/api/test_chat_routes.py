from fastapi.testclient import TestClient

from conftest import TEST_USER_ID
from superagent.chat.prompts import SPREADSHEET_CONNECTED_MESSAGE
from superagent.llm import AgentRunResult, LLMProviderDownError

# --- Test /api/superagent ---

def test_superagent_text_reply(client: TestClient, mock_llm):
    response = client.post("/api/superagent", json={
        "prompt": "Hello",
        "selectedTool": None,
        "conversationHistory": [],
        "userId": TEST_USER_ID,
    })

    assert response.status_code == 200
    assert response.json() == {"response": "Hello! How can I help you today?", "slides": [], "hasSlides": False}
    mock_llm.generate_text.assert_awaited_once()

def test_superagent_without_user_id(client: TestClient, mock_llm):
    response = client.post("/api/superagent", json={"prompt": "Hello"})

    assert response.status_code == 401
    assert response.json() == {"error": "Authentication required. Please sign in."}
    mock_llm.generate_text.assert_not_awaited()

def test_superagent_sheet_greeting(client: TestClient, mock_llm):
    response = client.post("/api/superagent", json={
        "prompt": "",
        "userId": TEST_USER_ID,
        "sheetUrl": "https://docs.google.com/spreadsheets/d/1AbC/edit",
    })

    assert response.status_code == 200
    assert response.json()["response"] == SPREADSHEET_CONNECTED_MESSAGE
    mock_llm.generate_text.assert_not_awaited()

def test_superagent_slides_marker(client: TestClient, mock_llm):
    mock_llm.generate_text.return_value = AgentRunResult(text="# Solar Power\n- Cheap\n- Clean\n\n**[SLIDES]**")

    response = client.post("/api/superagent", json={
        "prompt": "Turn this into slides",
        "userId": TEST_USER_ID,
        "conversationHistory": [{"role": "user", "content": "Tell me about solar", "id": "m-1"}],
    })

    assert response.status_code == 200
    data = response.json()
    assert data["response"] == "# Solar Power\n- Cheap\n- Clean"
    assert data["hasSlides"] is True
    assert len(data["slides"]) == 5
    assert data["slides"][0]["type"] == "title"
    assert all(slide["html"].startswith("<style>") for slide in data["slides"])

def test_superagent_llm_failure(client: TestClient, mock_llm):
    mock_llm.generate_text.side_effect = LLMProviderDownError("connection refused")

    response = client.post("/api/superagent", json={"prompt": "Hello", "userId": TEST_USER_ID})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to process your request. Please try again."}

# --- Test /api/google-sheets-agent ---

def test_google_sheets_agent(client: TestClient, mock_llm):
    mock_llm.generate_text.return_value = AgentRunResult(text="Total revenue is $1.2M.", steps=2)

    response = client.post("/api/google-sheets-agent", json={
        "message": "What is the total revenue?",
        "sheetUrl": "https://docs.google.com/spreadsheets/d/1AbC/edit",
        "userId": TEST_USER_ID,
    })

    assert response.status_code == 200
    assert response.json() == {
        "response": "Total revenue is $1.2M.",
        "finishReason": "stop",
        "sheetId": "1AbC",
        "userId": TEST_USER_ID,
    }

def test_google_sheets_agent_failure(client: TestClient, mock_llm):
    mock_llm.generate_text.side_effect = LLMProviderDownError("connection refused")

    response = client.post("/api/google-sheets-agent", json={"message": "Hi", "userId": TEST_USER_ID})

    assert response.status_code == 500
