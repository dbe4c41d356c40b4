from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from superagent.slides.models import Slide

class ConversationTurn(BaseModel):
    # The browser sends its whole message objects (ids, timestamps, slide data); only role and content matter here.
    model_config = ConfigDict(extra="ignore")

    role: Literal["user", "assistant", "system"]
    content: str = ""

class ChatRequest(BaseModel):
    prompt: str = ""
    selectedTool: Optional[str] = None
    conversationHistory: List[ConversationTurn] = []
    userId: Optional[str] = None
    sheetUrl: Optional[str] = None
    docUrl: Optional[str] = None

class ChatResponse(BaseModel):
    response: str
    slides: List[Slide] = []
    hasSlides: bool = False

class SheetsAgentRequest(BaseModel):
    message: str = ""
    sheetUrl: Optional[str] = None
    conversationHistory: List[ConversationTurn] = []
    userId: Optional[str] = None
