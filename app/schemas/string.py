from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List
from datetime import datetime


class StringCreate(BaseModel):
    value: str = Field(..., description="String to analyze")

    @field_validator('value')
    @classmethod
    def reject_lone_surrogates(cls, v):
        """JSON allows unpaired \\uD800-\\uDFFF escapes; they have no UTF-8 form"""
        if any('\ud800' <= ch <= '\udfff' for ch in v):
            raise ValueError("value must be valid Unicode text")
        return v


class StringProperties(BaseModel):
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]

    class Config:
        frozen = True


class StringRecord(BaseModel):
    id: str  # SHA-256 hash of value
    value: str
    properties: StringProperties
    created_at: datetime

    class Config:
        frozen = True


class StringListResponse(BaseModel):
    data: List[StringRecord]
    count: int
    filters_applied: Dict[str, Any] = {}


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: List[StringRecord]
    count: int
    interpreted_query: InterpretedQuery
