import asyncio
import boto3
import os
import json
from errors import EmptyResponseError
from utils import logging

# Optional: store model ID in env vars or config
BEDROCK_MODEL_ID = os.getenv("BEDROCK_MODEL_ID", "amazon.nova-lite-v1:0")
BEDROCK_REGION = os.getenv("BEDROCK_REGION", "us-east-1")
PROMPTS_DIR = os.getenv("PROMPTS_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), "prompts"))

bedrock = boto3.client("bedrock-runtime", region_name=BEDROCK_REGION)


def load_prompt_template(name: str) -> str:
    template_path = os.path.join(PROMPTS_DIR, f"{name}.txt")
    try:
        with open(template_path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError as e:
        logging.error(f"Error loading prompt template from {template_path}: {str(e)}")
        raise


def build_dictionary_prompt(text: str) -> str:
    return load_prompt_template("dictionary_lookup").format(text=text)


async def invoke_dictionary_model(text: str, system_prompt: str) -> str:
    """
    Single model call for a dictionary lookup. Raises EmptyResponseError when
    the reply carries no text; retrying is left to the caller.
    """
    user_message = f'Analyze the word: "{text}"'
    raw_output = await asyncio.to_thread(call_bedrock, system_prompt, user_message)
    response_text = extract_response_text(raw_output)

    if not response_text or not response_text.strip():
        raise EmptyResponseError("Empty response from the model")

    return response_text


def extract_response_text(raw_output) -> str:
    if isinstance(raw_output, dict):
        if "response" in raw_output:
            response = raw_output["response"]
            if response is None or isinstance(response, str):
                return response
            return json.dumps(response, ensure_ascii=False)
        try:
            return raw_output["output"]["message"]["content"][0]["text"]
        except (KeyError, IndexError, TypeError):
            pass
    elif isinstance(raw_output, str):
        return raw_output

    return json.dumps(raw_output, ensure_ascii=False)


def call_bedrock(system_prompt: str, user_message: str, temperature=0.3, max_tokens=1000):
    try:
        logging.debug(f"Calling Bedrock with system prompt: {system_prompt}")

        response = bedrock.invoke_model(
            modelId=BEDROCK_MODEL_ID,
            body=bytes(
                json.dumps({
                    "system": [
                        {"text": system_prompt}
                    ],
                    "messages": [
                        {
                            "role": "user",
                            "content": [
                                {"text": user_message}
                            ]
                        }
                    ],
                    "inferenceConfig": {
                        "maxTokens": max_tokens,
                        "stopSequences": [],
                        "temperature": temperature,
                        "topP": 0.95,
                        "top_k": 50
                    }
                }),
                "utf-8"
            ),
            contentType="application/json",
            accept="application/json"
        )

        response_body = response["body"].read().decode("utf-8")
        result = json.loads(response_body)

        logging.debug(f"Received response from Bedrock: {result}")

        return result
    except Exception as e:
        logging.exception(f"Error calling Bedrock model: {str(e)}")
        raise
