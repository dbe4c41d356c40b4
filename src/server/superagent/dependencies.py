# src/server/superagent/dependencies.py
from fastapi import Depends, Request

from superagent.config import APP_BASE_URL
from superagent.integrations.utils import ConnectionGateway
from superagent.llm import LLMClient
from superagent.slides.export import PresentationConverter
from superagent.slides.utils import SlideGenerationService
from superagent.toolkits.platform import ToolPlatform

# --- Providers ---
# Clients are built once in the app lifespan and stored on app.state.
# Routes receive them through these providers so tests can swap in fakes.

def get_llm_client(request: Request) -> LLMClient:
    return request.app.state.llm_client

def get_tool_platform(request: Request) -> ToolPlatform:
    return request.app.state.tool_platform

def get_presentation_converter(request: Request) -> PresentationConverter:
    return request.app.state.presentation_converter

def get_slide_service(llm: LLMClient = Depends(get_llm_client)) -> SlideGenerationService:
    return SlideGenerationService(llm)

def get_connection_gateway(platform: ToolPlatform = Depends(get_tool_platform)) -> ConnectionGateway:
    return ConnectionGateway(platform, callback_url=APP_BASE_URL)
