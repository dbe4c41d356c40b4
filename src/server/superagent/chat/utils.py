import re
import logging
from typing import Any, Dict, List, Optional

from superagent.auth.utils import AuthRequiredError
from superagent.chat.models import ChatRequest, ChatResponse, ConversationTurn, SheetsAgentRequest
from superagent.chat.prompts import (
    ATTACHMENT_PROTOCOL_PROMPT, DOCUMENT_CONNECTED_MARKER, DOCUMENT_CONNECTED_MESSAGE,
    SHEETS_AGENT_SYSTEM_PROMPT, SLIDES_MARKER, SPREADSHEET_CONNECTED_MARKER,
    SPREADSHEET_CONNECTED_MESSAGE, SUPER_AGENT_SYSTEM_PROMPT,
)
from superagent.config import AGENT_MAX_STEPS, SHEETS_AGENT_MAX_STEPS
from superagent.llm import AgentRunResult, LLMClient, ToolResultRecord
from superagent.slides.models import Slide
from superagent.slides.utils import SlideGenerationService
from superagent.toolkits.platform import ToolPlatform
from superagent.toolkits.slide_tool import SLIDE_GENERATOR_TOOL
from superagent.toolkits.utils import SHEET_TOOLKIT, ToolContext, ToolExecutor, resolve_tool_capabilities

logger = logging.getLogger(__name__)

# Matches the marker with or without the markdown emphasis the prompt asks for
SLIDES_MARKER_PATTERN = re.compile(r"\*{0,2}" + re.escape(SLIDES_MARKER) + r"\*{0,2}")
SHEET_ID_PATTERN = re.compile(r"/spreadsheets/d/([a-zA-Z0-9-_]+)")

class ChatProcessingError(Exception):
    """Any failure between tool resolution and result interpretation."""
    pass

def contains_slides_marker(text: str) -> bool:
    return bool(text) and SLIDES_MARKER in text

def strip_slides_marker(text: str) -> str:
    return SLIDES_MARKER_PATTERN.sub("", text or "").strip()

def _history_mentions(history: List[ConversationTurn], marker: str) -> bool:
    return any(marker in (turn.content or "") for turn in history)

def attachment_greeting(request: ChatRequest) -> Optional[str]:
    """
    Returns the canned greeting for a newly attached sheet or doc, or None.
    An attachment counts as announced once any turn in the history carries its marker.
    """
    if request.sheetUrl and not _history_mentions(request.conversationHistory, SPREADSHEET_CONNECTED_MARKER):
        return SPREADSHEET_CONNECTED_MESSAGE
    if request.docUrl and not _history_mentions(request.conversationHistory, DOCUMENT_CONNECTED_MARKER):
        return DOCUMENT_CONNECTED_MESSAGE
    return None

def build_system_prompt(request: ChatRequest, available_tools: List[str]) -> str:
    system_prompt = SUPER_AGENT_SYSTEM_PROMPT.format(
        selected_tool=request.selectedTool or "General Assistant",
        user_id=request.userId,
        available_tools=", ".join(available_tools) if available_tools else "None",
    )
    if request.sheetUrl:
        system_prompt += ATTACHMENT_PROTOCOL_PROMPT.format(
            attachment_name="Google Sheet", attachment_kind="sheet",
            attachment_url=request.sheetUrl, marker=SLIDES_MARKER,
        )
    if request.docUrl:
        system_prompt += ATTACHMENT_PROTOCOL_PROMPT.format(
            attachment_name="Google Doc", attachment_kind="document",
            attachment_url=request.docUrl, marker=SLIDES_MARKER,
        )
    return system_prompt

def build_messages(history: List[ConversationTurn], prompt: Optional[str] = None) -> List[Dict[str, Any]]:
    messages = [{"role": turn.role, "content": turn.content} for turn in history if turn.content]
    if prompt:
        messages.append({"role": "user", "content": prompt})
    return messages

def find_generated_slides(tool_results: List[ToolResultRecord]) -> List[Slide]:
    """Slides produced inline by the custom slide tool, from its latest successful run."""
    for record in reversed(tool_results):
        if record.tool_name != SLIDE_GENERATOR_TOOL or not isinstance(record.result, dict):
            continue
        if not record.result.get("successful"):
            continue
        slide_data = (record.result.get("data") or {}).get("slides") or []
        return [Slide.model_validate(slide) for slide in slide_data]
    return []

async def interpret_agent_result(run: AgentRunResult, slide_service: SlideGenerationService) -> ChatResponse:
    text = run.text
    if contains_slides_marker(text):
        text = strip_slides_marker(text)
        if text:
            logger.info("Slides marker found in agent reply; generating slides from the outline.")
            slides = await slide_service.generate_from_content(text)
            return ChatResponse(response=text, slides=slides, hasSlides=bool(slides))
        # A bare marker carries no outline; the turn continues as a normal reply.
        logger.warning("Slides marker found without any outline text; skipping slide generation.")

    slides = find_generated_slides(run.tool_results)
    if slides:
        return ChatResponse(response=text, slides=slides, hasSlides=True)

    return ChatResponse(response=text, hasSlides=False)

async def process_chat_turn(
    request: ChatRequest,
    llm: LLMClient,
    platform: ToolPlatform,
    slide_service: SlideGenerationService,
) -> ChatResponse:
    if not request.userId:
        raise AuthRequiredError("Authentication required. Please sign in.")

    # A freshly attached document only gets an acknowledgement; no model call is made for it.
    greeting = attachment_greeting(request)
    if greeting:
        logger.info(f"New attachment for user {request.userId}; replying with the connection greeting.")
        return ChatResponse(response=greeting, hasSlides=False)

    try:
        context = ToolContext(
            user_id=request.userId,
            selected_tool=request.selectedTool,
            sheet_url=request.sheetUrl,
            doc_url=request.docUrl,
        )
        tools = await resolve_tool_capabilities(platform, context)
        system_prompt = build_system_prompt(request, sorted(tools.keys()))
        messages = build_messages(request.conversationHistory, request.prompt)

        run = await llm.generate_text(
            system_prompt=system_prompt,
            messages=messages,
            tools=tools,
            execute_tool=ToolExecutor(platform, slide_service, request.userId),
            max_steps=AGENT_MAX_STEPS,
        )
        logger.info(f"Agent finished for user {request.userId} after {run.steps} steps ({run.finish_reason}), "
                    f"{len(run.tool_calls)} tool calls.")
        return await interpret_agent_result(run, slide_service)
    except Exception as e:
        logger.error(f"Failed to process chat turn for user {request.userId}: {e}", exc_info=True)
        raise ChatProcessingError("Failed to process your request.") from e

def extract_sheet_id(url: Optional[str]) -> str:
    match = SHEET_ID_PATTERN.search(url or "")
    return match.group(1) if match else ""

async def run_sheets_agent(request: SheetsAgentRequest, llm: LLMClient, platform: ToolPlatform) -> Dict[str, Any]:
    """Single-toolkit agent that answers questions about one spreadsheet."""
    if not request.userId:
        raise AuthRequiredError("Authentication required. Please sign in.")

    sheet_id = extract_sheet_id(request.sheetUrl)
    conversation_context = ""
    if request.conversationHistory:
        conversation_context = "\nPrevious conversation:\n" + "\n".join(
            f"{turn.role}: {turn.content}" for turn in request.conversationHistory
        )

    tools = await platform.get_tools(request.userId, toolkits=[SHEET_TOOLKIT])
    system_prompt = SHEETS_AGENT_SYSTEM_PROMPT.format(
        sheet_url=request.sheetUrl or "",
        sheet_id=sheet_id,
        user_id=request.userId,
        conversation_context=conversation_context,
    )

    async def execute_sheet_tool(tool_name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return await platform.execute(tool_name, arguments, request.userId)
        except Exception as e:
            logger.error(f"Sheets tool '{tool_name}' failed for user {request.userId}: {e}", exc_info=True)
            return {"data": {}, "error": str(e), "successful": False}

    run = await llm.generate_text(
        system_prompt=system_prompt,
        messages=[{"role": "user", "content": request.message}],
        tools=tools,
        execute_tool=execute_sheet_tool,
        max_steps=SHEETS_AGENT_MAX_STEPS,
    )
    return {
        "response": run.text,
        "finishReason": run.finish_reason,
        "sheetId": sheet_id,
        "userId": request.userId,
    }
