import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from superagent.slides.utils import SlideGenerationService
from superagent.toolkits.platform import CapabilitySet, ToolPlatform, describe_tools
from superagent.toolkits.slide_tool import (
    SLIDE_GENERATOR_DESCRIPTOR, SLIDE_GENERATOR_TOOL, execute_slide_generator,
)

logger = logging.getLogger(__name__)

GENERAL_TOOLKITS = ("COMPOSIO_SEARCH", "COMPOSIO")
GENERAL_CHAT_MODE = "chat"

# UI modes that pull in an extra toolkit for the turn
MODE_TOOLKITS: Dict[str, Tuple[str, ...]] = {
    "sheets": ("GOOGLESHEETS",),
    "docs": ("GOOGLEDOCS",),
    "agents": ("GOOGLESUPER",),
}
MODE_TOOLKIT_LIMIT = 10

SHEET_TOOLKIT = "GOOGLESHEETS"
SHEET_FETCH_TOOL = "GOOGLESHEETS_GET_SHEET_BY_ID"
DOC_TOOLKIT = "GOOGLEDOCS"
DOC_FETCH_TOOL = "GOOGLEDOCS_GET_DOCUMENT_BY_ID"
DOC_TOOLKIT_LIMIT = 10

@dataclass
class ToolContext:
    user_id: str
    selected_tool: Optional[str] = None
    sheet_url: Optional[str] = None
    doc_url: Optional[str] = None

@dataclass
class CapabilityGroup:
    name: str
    toolkits: Tuple[str, ...] = ()
    tools: Tuple[str, ...] = ()
    limit: Optional[int] = None
    # Application-defined descriptors that never go through the platform
    local_tools: Dict[str, dict] = field(default_factory=dict)

def plan_capability_groups(context: ToolContext) -> List[CapabilityGroup]:
    """
    Lists the capability groups for one turn, lowest precedence first:
    general < selected mode < custom slide tool < attached document.
    """
    groups: List[CapabilityGroup] = []
    mode = (context.selected_tool or "").lower()

    if mode != GENERAL_CHAT_MODE:
        groups.append(CapabilityGroup(name="general", toolkits=GENERAL_TOOLKITS))

    if mode in MODE_TOOLKITS:
        groups.append(CapabilityGroup(name=f"mode:{mode}", toolkits=MODE_TOOLKITS[mode], limit=MODE_TOOLKIT_LIMIT))

    groups.append(CapabilityGroup(
        name="slides",
        local_tools={SLIDE_GENERATOR_TOOL: SLIDE_GENERATOR_DESCRIPTOR},
    ))

    if context.sheet_url:
        groups.append(CapabilityGroup(name="sheet", toolkits=(SHEET_TOOLKIT,)))
        groups.append(CapabilityGroup(name="sheet:fetch", tools=(SHEET_FETCH_TOOL,)))

    if context.doc_url:
        groups.append(CapabilityGroup(name="doc", toolkits=(DOC_TOOLKIT,), limit=DOC_TOOLKIT_LIMIT))
        groups.append(CapabilityGroup(name="doc:fetch", tools=(DOC_FETCH_TOOL,)))

    return groups

def merge_capability_sets(capability_sets: Iterable[CapabilitySet]) -> CapabilitySet:
    """Ordered merge: when two sets expose the same tool name, the later set wins."""
    merged: CapabilitySet = {}
    for capability_set in capability_sets:
        for name, descriptor in capability_set.items():
            if name in merged and merged[name] != descriptor:
                logger.warning(f"Tool '{name}' is exposed by more than one capability group; keeping the later one.")
            merged[name] = descriptor
    return merged

async def resolve_capability_group(platform: ToolPlatform, user_id: str, group: CapabilityGroup) -> CapabilitySet:
    if group.local_tools:
        return dict(group.local_tools)
    try:
        return await platform.get_tools(user_id, toolkits=group.toolkits, tools=group.tools, limit=group.limit)
    except Exception as e:
        # A missing group degrades the agent; it does not fail the turn.
        logger.error(f"Could not resolve capability group '{group.name}' for user {user_id}: {e}", exc_info=True)
        return {}

async def resolve_tool_capabilities(platform: ToolPlatform, context: ToolContext) -> CapabilitySet:
    """Resolves the tools exposed to the model for this turn. Nothing is cached between turns."""
    resolved: List[CapabilitySet] = []
    for group in plan_capability_groups(context):
        resolved.append(await resolve_capability_group(platform, context.user_id, group))
    capabilities = merge_capability_sets(resolved)
    logger.info(f"Resolved {len(capabilities)} tools for user {context.user_id}: {describe_tools(capabilities)}")
    return capabilities

class ToolExecutor:
    """Routes tool calls from the model to the custom slide tool or to the platform."""

    def __init__(self, platform: ToolPlatform, slide_service: SlideGenerationService, user_id: str):
        self.platform = platform
        self.slide_service = slide_service
        self.user_id = user_id

    async def __call__(self, tool_name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"Executing tool '{tool_name}' for user {self.user_id}")
        if tool_name == SLIDE_GENERATOR_TOOL:
            return await execute_slide_generator(self.slide_service, arguments)
        try:
            return await self.platform.execute(tool_name, arguments, self.user_id)
        except Exception as e:
            logger.error(f"Tool '{tool_name}' failed for user {self.user_id}: {e}", exc_info=True)
            return {"data": {}, "error": str(e), "successful": False}
