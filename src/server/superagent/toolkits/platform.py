import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

from composio import Composio
from composio import exceptions as composio_exceptions

logger = logging.getLogger(__name__)

CapabilitySet = Dict[str, dict]

# Dedicated "already connected" exceptions raised by connected_accounts.initiate.
# Releases that lack the class report the case through a generic error, matched by is_multiple_accounts_error.
MULTIPLE_ACCOUNTS_ERRORS: Tuple[Type[BaseException], ...] = tuple(
    error_class for error_class in (getattr(composio_exceptions, "ComposioMultipleConnectedAccountsError", None),)
    if error_class is not None
)

def tool_name_of(descriptor: Any) -> Optional[str]:
    """Returns the function name of an OpenAI-style tool descriptor."""
    if hasattr(descriptor, "model_dump"):
        descriptor = descriptor.model_dump()
    if not isinstance(descriptor, dict):
        return None
    function = descriptor.get("function")
    if isinstance(function, dict) and function.get("name"):
        return function["name"]
    return descriptor.get("name")

def _as_dict(descriptor: Any) -> dict:
    if hasattr(descriptor, "model_dump"):
        return descriptor.model_dump()
    return dict(descriptor)

def is_multiple_accounts_error(error: Exception) -> bool:
    """
    True when `error` means the user already has connected accounts for the auth config.
    Gateways catch MULTIPLE_ACCOUNTS_ERRORS first; this also recognises the name, code and message forms.
    """
    if MULTIPLE_ACCOUNTS_ERRORS and isinstance(error, MULTIPLE_ACCOUNTS_ERRORS):
        return True
    code = str(getattr(error, "code", "") or "")
    return (
        "MultipleConnectedAccounts" in type(error).__name__
        or "MULTIPLE_CONNECTED_ACCOUNTS" in code.upper()
        or "multiple connected accounts" in str(error).lower()
    )

class ToolPlatform:
    """
    Async facade over the Composio SDK: toolkit lookup, tool execution and connected accounts.
    The SDK is synchronous, so every call runs in a worker thread.
    """

    def __init__(self, api_key: Optional[str], client: Optional[Composio] = None):
        self.api_key = api_key
        self._client = client

    @property
    def client(self) -> Composio:
        if self._client is None:
            if not self.api_key:
                raise ValueError("COMPOSIO_API_KEY is not configured.")
            self._client = Composio(api_key=self.api_key)
        return self._client

    async def get_tools(self, user_id: str, toolkits: Optional[Iterable[str]] = None,
                        tools: Optional[Iterable[str]] = None, limit: Optional[int] = None) -> CapabilitySet:
        kwargs: Dict[str, Any] = {}
        if toolkits:
            kwargs["toolkits"] = list(toolkits)
        if tools:
            kwargs["tools"] = list(tools)
        if limit:
            kwargs["limit"] = limit

        raw_tools = await asyncio.to_thread(self.client.tools.get, user_id, **kwargs)

        capability_set: CapabilitySet = {}
        for descriptor in raw_tools or []:
            name = tool_name_of(descriptor)
            if name:
                capability_set[name] = _as_dict(descriptor)
        return capability_set

    async def execute(self, slug: str, arguments: Dict[str, Any], user_id: str) -> Dict[str, Any]:
        result = await asyncio.to_thread(
            self.client.tools.execute,
            slug,
            arguments=arguments,
            user_id=user_id,
        )
        if hasattr(result, "model_dump"):
            return result.model_dump()
        return result

    async def initiate_connection(self, user_id: str, auth_config_id: str, callback_url: Optional[str] = None) -> Any:
        kwargs: Dict[str, Any] = {"user_id": user_id, "auth_config_id": auth_config_id}
        if callback_url:
            kwargs["callback_url"] = callback_url
        return await asyncio.to_thread(self.client.connected_accounts.initiate, **kwargs)

    async def get_connection(self, connection_id: str) -> Any:
        return await asyncio.to_thread(self.client.connected_accounts.get, connection_id)

def describe_tools(capabilities: CapabilitySet) -> List[str]:
    return sorted(capabilities.keys())
