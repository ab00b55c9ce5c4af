import json
import os

import bedrock_service
from errors import ParseError, SchemaError
from models import LanguageEnum, LookupResult, TranslationEntry
from utils import logging
from utils.retry import retry_with_backoff

MAX_RETRIES = int(os.getenv("LOOKUP_MAX_RETRIES", "5"))
BASE_DELAY_MS = int(os.getenv("LOOKUP_BASE_DELAY_MS", "1000"))

LANGUAGE_ALIASES = {
    LanguageEnum.ENGLISH: {"english", "en", "en-us"},
    LanguageEnum.MALAY: {"malay", "ms", "bahasa", "bahasa melayu"},
    LanguageEnum.CHINESE: {"chinese", "zh", "zh-cn", "mandarin", "simplified chinese", "traditional chinese"},
}

REQUIRED_FIELDS = ("word", "explanation", "example")


async def lookup(text: str) -> LookupResult:
    logging.info(f"Looking up dictionary entry for '{text}'")
    system_prompt = bedrock_service.build_dictionary_prompt(text)

    response_text = await retry_with_backoff(
        lambda: bedrock_service.invoke_dictionary_model(text, system_prompt),
        MAX_RETRIES,
        BASE_DELAY_MS,
    )

    logging.info("Model call succeeded")
    logging.info(f"Model response text: {response_text[:300]}")

    parsed = parse_response(clean_response(response_text))
    validate_structure(parsed)
    return sanitize_response(parsed)


def clean_response(text: str) -> str:
    # Models sometimes wrap the JSON in markdown code fences
    return text.replace("```json", "").replace("```", "").strip()


def parse_response(text: str):
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logging.error(f"Invalid JSON response from model: {str(e)}")
        raise ParseError(str(e)) from e


def validate_structure(parsed):
    if not isinstance(parsed, dict) or not parsed.get("sourceLanguage") or not isinstance(parsed.get("translations"), list):
        raise SchemaError("Invalid data structure from AI model")


def normalize_language(label) -> LanguageEnum | None:
    if not label or not isinstance(label, str):
        return None
    lower = label.strip().lower()
    for language, aliases in LANGUAGE_ALIASES.items():
        if lower in aliases:
            return language
    return None


def sanitize_translations(raw_translations: list) -> list[TranslationEntry]:
    """
    Normalize languages and drop every entry that is not a complete
    dictionary item. Order is preserved and nothing is deduplicated.
    """
    result = []
    for raw in raw_translations:
        if not raw or not isinstance(raw, dict):
            continue

        language = normalize_language(raw.get("language"))
        if language is None:
            logging.warning(f"Dropping translation with unrecognized language {raw.get('language')!r}")
            continue

        entry = {**raw, "language": language}
        if not all(isinstance(entry.get(field), str) and entry[field].strip() for field in REQUIRED_FIELDS):
            logging.warning(f"Dropping incomplete {language.value} translation {raw.get('word')!r}")
            continue

        result.append(TranslationEntry(**entry))

    return result


def sanitize_response(parsed: dict) -> LookupResult:
    source_language = normalize_language(parsed.get("sourceLanguage")) or LanguageEnum.ENGLISH
    translations = sanitize_translations(parsed["translations"])
    logging.info(f"Kept {len(translations)} of {len(parsed['translations'])} translations, source language {source_language.value}")
    return LookupResult(sourceLanguage=source_language, translations=translations)
