"""Inference request and result models."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from .common import CamelModel

Sentiment = Literal["positive", "neutral", "negative"]


class ValidateIdeaRequest(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=10, max_length=2000)
    category: str = Field(min_length=1, max_length=50)
    content: Optional[str] = None


class AIValidationResult(CamelModel):
    score: float = Field(ge=0, le=100)
    originality: float = Field(ge=0, le=100)
    quality: float = Field(ge=0, le=100)
    market_potential: float = Field(ge=0, le=100)
    category: str
    suggestions: list[str]
    risks: list[str]
    confidence: float = Field(ge=0, le=1)
    reasoning: str


class AnalyzeContentRequest(CamelModel):
    content: str = Field(min_length=1)
    content_type: str = Field(min_length=1)


class ContentAnalysis(CamelModel):
    summary: str
    keywords: list[str]
    sentiment: Sentiment
    topics: list[str]


class GenerateMetadataRequest(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=10, max_length=2000)
    category: str = Field(min_length=1, max_length=50)
    ai_score: float = Field(ge=0, le=100)


class AIHealth(CamelModel):
    status: str
    timestamp: int
