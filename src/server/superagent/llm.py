import json
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type, TypeVar

from openai import OpenAI, APIError
from pydantic import BaseModel, ValidationError
from json_extractor import JsonExtractor

from superagent.utils import clean_llm_output

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
ToolExecutor = Callable[[str, Dict[str, Any]], Awaitable[Any]]

class LLMProviderDownError(Exception):
    """Raised when the chat-completions provider cannot be reached or rejects the call."""
    pass

class StructuredOutputError(Exception):
    """Raised when the model's structured output does not satisfy the requested schema."""
    pass

@dataclass
class ToolCallRecord:
    tool_name: str
    arguments: Dict[str, Any]
    call_id: Optional[str] = None

@dataclass
class ToolResultRecord:
    tool_name: str
    result: Any
    call_id: Optional[str] = None

@dataclass
class AgentRunResult:
    text: str
    tool_calls: List[ToolCallRecord] = field(default_factory=list)
    tool_results: List[ToolResultRecord] = field(default_factory=list)
    finish_reason: str = "stop"
    steps: int = 0

def _parse_tool_arguments(raw_arguments: Optional[str]) -> Dict[str, Any]:
    if not raw_arguments:
        return {}
    try:
        parsed = json.loads(raw_arguments)
    except json.JSONDecodeError:
        parsed = JsonExtractor.extract_valid_json(raw_arguments)
    return parsed if isinstance(parsed, dict) else {}

class LLMClient:
    """
    Thin wrapper around an OpenAI-compatible chat-completions endpoint.
    The SDK client is built on first use so that constructing the wrapper never needs credentials.
    """

    def __init__(self, api_key: Optional[str], base_url: Optional[str], model_name: str,
                 structured_model_name: Optional[str] = None, client: Optional[OpenAI] = None):
        self.api_key = api_key
        self.base_url = base_url
        self.model_name = model_name
        self.structured_model_name = structured_model_name or model_name
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self.api_key:
                raise LLMProviderDownError("No OpenAI API key configured.")
            self._client = OpenAI(base_url=self.base_url, api_key=self.api_key)
        return self._client

    async def _create_completion(self, **kwargs):
        def sync_api_call():
            return self.client.chat.completions.create(**kwargs)

        try:
            return await asyncio.to_thread(sync_api_call)
        except APIError as e:
            logger.error(f"LLM provider call failed: {e}", exc_info=True)
            raise LLMProviderDownError(f"LLM provider call failed: {e}") from e

    async def generate_text(
        self,
        system_prompt: str,
        messages: List[Dict[str, Any]],
        tools: Optional[Dict[str, dict]] = None,
        execute_tool: Optional[ToolExecutor] = None,
        max_steps: int = 1,
    ) -> AgentRunResult:
        """
        Runs the model with the given tools, executing requested tool calls and feeding the
        results back until the model answers in plain text or `max_steps` completions were made.
        """
        conversation: List[Dict[str, Any]] = [{"role": "system", "content": system_prompt}]
        conversation.extend(messages)
        tool_descriptors = list((tools or {}).values())

        result = AgentRunResult(text="")
        for step in range(1, max_steps + 1):
            request: Dict[str, Any] = {"model": self.model_name, "messages": conversation}
            if tool_descriptors:
                request["tools"] = tool_descriptors
                request["tool_choice"] = "auto"

            logger.info(f"LLM step {step}/{max_steps} with {len(tool_descriptors)} tools (model: {self.model_name})")
            completion = await self._create_completion(**request)
            choice = completion.choices[0]
            message = choice.message
            result.steps = step
            result.finish_reason = choice.finish_reason or "stop"

            if not message.tool_calls:
                result.text = clean_llm_output(message.content or "")
                return result

            if execute_tool is None:
                raise LLMProviderDownError("Model requested tool calls but no tool executor was supplied.")

            conversation.append({
                "role": "assistant",
                "content": message.content or "",
                "tool_calls": [
                    {
                        "id": tool_call.id,
                        "type": "function",
                        "function": {"name": tool_call.function.name, "arguments": tool_call.function.arguments},
                    }
                    for tool_call in message.tool_calls
                ],
            })

            for tool_call in message.tool_calls:
                tool_name = tool_call.function.name
                arguments = _parse_tool_arguments(tool_call.function.arguments)
                result.tool_calls.append(ToolCallRecord(tool_name=tool_name, arguments=arguments, call_id=tool_call.id))

                tool_output = await execute_tool(tool_name, arguments)
                result.tool_results.append(ToolResultRecord(tool_name=tool_name, result=tool_output, call_id=tool_call.id))
                conversation.append({
                    "role": "tool",
                    "tool_call_id": tool_call.id,
                    "content": json.dumps(tool_output, default=str),
                })

        logger.warning(f"Agent stopped after reaching the step limit ({max_steps}).")
        result.finish_reason = "max_steps"
        return result

    async def generate_object(self, prompt: str, schema: Type[ModelT], system_prompt: Optional[str] = None) -> ModelT:
        """Requests a JSON answer and validates it against `schema`. Non-conforming output is a hard failure."""
        messages: List[Dict[str, Any]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        completion = await self._create_completion(
            model=self.structured_model_name,
            messages=messages,
            response_format={"type": "json_object"},
        )
        raw_content = completion.choices[0].message.content or ""
        cleaned_output = clean_llm_output(raw_content)

        parsed = JsonExtractor.extract_valid_json(cleaned_output)
        if parsed is None:
            logger.error(f"Structured output was not valid JSON: {cleaned_output[:500]}")
            raise StructuredOutputError("Model output was not valid JSON.")

        try:
            return schema.model_validate(parsed)
        except ValidationError as e:
            logger.error(f"Structured output failed {schema.__name__} validation: {e}")
            raise StructuredOutputError(f"Model output does not match {schema.__name__}: {e}") from e
