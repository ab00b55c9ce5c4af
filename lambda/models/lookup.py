from pydantic import BaseModel, ConfigDict
from typing import Any, Optional
from enum import Enum


class LanguageEnum(str, Enum):
    ENGLISH = "English"
    MALAY = "Malay"
    CHINESE = "Chinese"


class LookupRequest(BaseModel):
    text: Optional[str] = None


class TranslationEntry(BaseModel):
    # Whatever else the model returned on an entry is passed through untouched
    model_config = ConfigDict(extra="allow")

    language: LanguageEnum
    word: str
    explanation: str
    example: str
    pinyin: Optional[Any] = None


class LookupResult(BaseModel):
    sourceLanguage: LanguageEnum = LanguageEnum.ENGLISH
    translations: list[TranslationEntry] = []


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
