import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from superagent.auth.utils import AuthRequiredError
from superagent.chat.models import ChatRequest, SheetsAgentRequest
from superagent.chat.utils import ChatProcessingError, process_chat_turn, run_sheets_agent
from superagent.dependencies import get_llm_client, get_slide_service, get_tool_platform
from superagent.llm import LLMClient
from superagent.slides.utils import SlideGenerationService
from superagent.toolkits.platform import ToolPlatform

router = APIRouter(
    prefix="/api",
    tags=["Chat"]
)
logger = logging.getLogger(__name__)

AUTH_REQUIRED_RESPONSE = {"error": "Authentication required. Please sign in."}
PROCESSING_FAILED_RESPONSE = {"error": "Failed to process your request. Please try again."}

@router.post("/superagent", summary="Super Agent chat turn")
async def superagent_endpoint(
    request_body: ChatRequest,
    llm: LLMClient = Depends(get_llm_client),
    platform: ToolPlatform = Depends(get_tool_platform),
    slide_service: SlideGenerationService = Depends(get_slide_service),
):
    try:
        chat_response = await process_chat_turn(request_body, llm, platform, slide_service)
    except AuthRequiredError:
        return JSONResponse(content=AUTH_REQUIRED_RESPONSE, status_code=401)
    except ChatProcessingError:
        return JSONResponse(content=PROCESSING_FAILED_RESPONSE, status_code=500)

    return JSONResponse(content=chat_response.model_dump(mode="json"))

@router.post("/google-sheets-agent", summary="Spreadsheet-only agent")
async def google_sheets_agent_endpoint(
    request_body: SheetsAgentRequest,
    llm: LLMClient = Depends(get_llm_client),
    platform: ToolPlatform = Depends(get_tool_platform),
):
    try:
        result = await run_sheets_agent(request_body, llm, platform)
    except AuthRequiredError:
        return JSONResponse(content=AUTH_REQUIRED_RESPONSE, status_code=401)
    except Exception as e:
        logger.error(f"Error in Google Sheets agent for user {request_body.userId}: {e}", exc_info=True)
        return JSONResponse(content=PROCESSING_FAILED_RESPONSE, status_code=500)

    return JSONResponse(content=result)
