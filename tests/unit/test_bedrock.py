import io
import json
import os
from unittest.mock import MagicMock

import pytest

from bedrock_service import bedrock
from errors import EmptyResponseError, TransientServiceError


def bedrock_reply(payload) -> dict:
    return {"body": io.BytesIO(json.dumps(payload).encode("utf-8"))}


def nova_reply(text: str) -> dict:
    return {"output": {"message": {"role": "assistant", "content": [{"text": text}]}}, "stopReason": "end_turn"}


@pytest.fixture
def client(monkeypatch):
    mock_client = MagicMock()
    monkeypatch.setattr(bedrock, "bedrock", mock_client)
    return mock_client


def test_extract_response_text_shapes():
    assert bedrock.extract_response_text({"response": "hello"}) == "hello"
    assert bedrock.extract_response_text(nova_reply("from nova")) == "from nova"
    assert bedrock.extract_response_text("bare") == "bare"
    assert bedrock.extract_response_text([1, 2]) == "[1, 2]"
    assert bedrock.extract_response_text({"other": "值"}) == '{"other": "值"}'


def test_build_dictionary_prompt_substitutes_text():
    prompt = bedrock.build_dictionary_prompt("kucing")

    assert '"kucing"' in prompt
    assert '"sourceLanguage": "English"' in prompt
    assert "{text}" not in prompt


def test_load_prompt_template_missing(monkeypatch, tmp_path):
    monkeypatch.setattr(bedrock, "PROMPTS_DIR", str(tmp_path))

    with pytest.raises(FileNotFoundError):
        bedrock.load_prompt_template("dictionary_lookup")


def test_call_bedrock_sends_system_and_user_messages(client):
    client.invoke_model.return_value = bedrock_reply(nova_reply("{}"))

    result = bedrock.call_bedrock("system prompt", 'Analyze the word: "apple"')

    assert result["output"]["message"]["content"][0]["text"] == "{}"
    kwargs = client.invoke_model.call_args.kwargs
    assert kwargs["modelId"] == bedrock.BEDROCK_MODEL_ID
    body = json.loads(kwargs["body"].decode("utf-8"))
    assert body["system"] == [{"text": "system prompt"}]
    assert body["messages"] == [{"role": "user", "content": [{"text": 'Analyze the word: "apple"'}]}]


def test_call_bedrock_reraises_client_errors(client):
    client.invoke_model.side_effect = RuntimeError("ThrottlingException")

    with pytest.raises(RuntimeError, match="ThrottlingException"):
        bedrock.call_bedrock("system prompt", "user message")


@pytest.mark.asyncio
async def test_invoke_dictionary_model_returns_text(client):
    client.invoke_model.return_value = bedrock_reply(nova_reply('{"sourceLanguage": "English"}'))

    text = await bedrock.invoke_dictionary_model("apple", "system prompt")

    assert text == '{"sourceLanguage": "English"}'
    client.invoke_model.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("reply", ["", "   \n", None])
async def test_invoke_dictionary_model_rejects_empty_text(client, reply):
    client.invoke_model.return_value = bedrock_reply({"response": reply})

    with pytest.raises(EmptyResponseError) as excinfo:
        await bedrock.invoke_dictionary_model("apple", "system prompt")

    assert isinstance(excinfo.value, TransientServiceError)
    client.invoke_model.assert_called_once()


def test_extract_response_text_serializes_non_string_response():
    assert bedrock.extract_response_text({"response": 42}) == "42"
    assert bedrock.extract_response_text({"response": {"sourceLanguage": "Malay"}}) == '{"sourceLanguage": "Malay"}'


@pytest.mark.asyncio
async def test_invoke_dictionary_model_accepts_object_response(client):
    client.invoke_model.return_value = bedrock_reply({"response": {"sourceLanguage": "Malay", "translations": []}})

    text = await bedrock.invoke_dictionary_model("kucing", "system prompt")

    assert json.loads(text) == {"sourceLanguage": "Malay", "translations": []}


def test_prompt_template_ships_inside_the_package():
    package_dir = os.path.dirname(os.path.abspath(bedrock.__file__))

    assert os.path.commonpath([bedrock.PROMPTS_DIR, package_dir]) == package_dir
    assert os.path.isfile(os.path.join(bedrock.PROMPTS_DIR, "dictionary_lookup.txt"))
