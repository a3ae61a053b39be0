import json
import types

import httpx
import pytest
from openai import APIConnectionError

from mcp_client_cli.abstractions.dto.conversation import Message
from mcp_client_cli.exceptions import InferenceError
from mcp_client_cli.infrastructure.config import LLMConfig
from mcp_client_cli.infrastructure.llm.openai_gateway import OpenAIModelGateway, TOOL_RESULT_WIRE_ROLE


CONFIG = LLMConfig(api_key="x", base_url="https://api.example.com/v1", model="gpt-test", max_tokens=321)


def _make_choice(content=None, tool_calls=None):
    message = types.SimpleNamespace(content=content, tool_calls=tool_calls)
    return types.SimpleNamespace(message=message)


def _make_tool_call(name: str, arguments):
    fn = types.SimpleNamespace(name=name, arguments=arguments)
    return types.SimpleNamespace(type="function", function=fn)


class FakeCompletions:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def _gateway(completions: FakeCompletions) -> OpenAIModelGateway:
    client = types.SimpleNamespace(chat=types.SimpleNamespace(completions=completions))
    return OpenAIModelGateway(CONFIG, client=client)


@pytest.mark.asyncio
async def test_request_carries_model_limits_and_tools(weather_catalog):
    completions = FakeCompletions(types.SimpleNamespace(choices=[_make_choice("hi")]))
    gateway = _gateway(completions)

    await gateway.complete([Message("user", "hello")], weather_catalog)

    request = completions.requests[0]
    assert request["model"] == "gpt-test"
    assert request["max_tokens"] == 321
    assert request["messages"] == [{"role": "user", "content": "hello"}]
    assert request["tools"] == [
        {
            "type": "function",
            "function": {
                "name": "get_weather",
                "description": "Current weather for a city",
                "parameters": weather_catalog.get_tool("get_weather").input_schema,
            },
        }
    ]


@pytest.mark.asyncio
async def test_no_tools_key_without_catalog_or_when_empty(empty_catalog):
    completions = FakeCompletions(types.SimpleNamespace(choices=[]))
    gateway = _gateway(completions)

    await gateway.complete([Message("user", "a")])
    await gateway.complete([Message("user", "a")], empty_catalog)

    assert all("tools" not in r for r in completions.requests)


@pytest.mark.asyncio
async def test_tool_results_are_sent_as_user_turns():
    completions = FakeCompletions(types.SimpleNamespace(choices=[]))
    gateway = _gateway(completions)

    await gateway.complete(
        [
            Message("user", "weather?"),
            Message("tool_result", {"temp": 20}),
        ]
    )

    assert TOOL_RESULT_WIRE_ROLE == "user"
    assert completions.requests[0]["messages"] == [
        {"role": "user", "content": "weather?"},
        {"role": "user", "content": json.dumps({"temp": 20})},
    ]


@pytest.mark.asyncio
async def test_choices_become_candidates_in_order():
    response = types.SimpleNamespace(
        choices=[
            _make_choice("plain"),
            _make_choice(None, [_make_tool_call("get_weather", '{"city":"Paris"}'), _make_tool_call("other", "{}")]),
            _make_choice(None),
        ]
    )
    gateway = _gateway(FakeCompletions(response))

    result = await gateway.complete([Message("user", "q")])

    kinds = [c.kind for c in result]
    assert kinds == ["text", "tool_call", "text"]
    assert result.candidates[0].content == "plain"
    assert result.candidates[1].request.tool_name == "get_weather"
    assert result.candidates[1].request.arguments == '{"city":"Paris"}'
    assert result.candidates[2].content == ""


@pytest.mark.asyncio
async def test_dict_shaped_tool_calls_are_accepted():
    message = types.SimpleNamespace(
        content="thinking",
        tool_calls=[{"type": "function", "function": {"name": "sum", "arguments": {"a": 1}}}],
    )
    gateway = _gateway(FakeCompletions(types.SimpleNamespace(choices=[types.SimpleNamespace(message=message)])))

    result = await gateway.complete([Message("user", "q")])

    candidate = result.first()
    assert candidate.is_tool_call
    assert json.loads(candidate.request.arguments) == {"a": 1}


@pytest.mark.asyncio
async def test_sdk_errors_become_inference_errors():
    error = APIConnectionError(request=httpx.Request("POST", "https://api.example.com/v1/chat/completions"))
    gateway = _gateway(FakeCompletions(error=error))

    with pytest.raises(InferenceError) as exc_info:
        await gateway.complete([Message("user", "q")])
    assert exc_info.value.__cause__ is error


def test_gateway_exposes_configured_model():
    gateway = OpenAIModelGateway(CONFIG)
    assert gateway.model == "gpt-test"
    assert gateway.base_url == "https://api.example.com/v1"
