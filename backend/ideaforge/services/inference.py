"""LLM-backed idea scoring, content analysis and NFT metadata drafting."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from anthropic import Anthropic

from .. import schemas
from ..config import Settings
from ..errors import GatewayError

# purpose: wrap the Anthropic Messages API behind typed scoring and analysis calls
# status: active
# depends_on: ideaforge.config.Settings

logger = logging.getLogger(__name__)

VALIDATOR_SYSTEM = (
    "You are an expert AI validator for intellectual property. Analyze ideas for "
    "originality, quality, market potential, and provide detailed scoring with reasoning."
)
METADATA_SYSTEM = (
    "You are an expert at generating NFT metadata. Create detailed, accurate, and "
    "valuable metadata for intellectual property NFTs."
)
ANALYST_SYSTEM = (
    "You are an expert content analyst. Provide accurate analysis of text content "
    "including summary, keywords, sentiment, and topics."
)

SENTIMENTS = ("positive", "neutral", "negative")


class InferenceError(GatewayError):
    """Raised when the model provider call fails for a non-absorbing operation."""


def fallback_validation() -> schemas.AIValidationResult:
    return schemas.AIValidationResult(
        score=50,
        originality=50,
        quality=50,
        market_potential=50,
        category="Unknown",
        suggestions=["Unable to analyze - manual review required"],
        risks=["Analysis failed - requires human validation"],
        confidence=0.1,
        reasoning="AI analysis failed, manual review required",
    )


def build_validation_prompt(title: str, description: str, category: str, content: Optional[str] = None) -> str:
    content_line = f"Content: {content}" if content else ""
    return f"""Please analyze this intellectual property submission and provide a comprehensive evaluation:

Title: {title}
Description: {description}
Category: {category}
{content_line}

Please evaluate on the following criteria (0-100 scale):
1. Originality: How unique and novel is this idea?
2. Quality: How well-developed and thought-out is the concept?
3. Market Potential: How viable and commercially valuable is this idea?
4. Overall Score: Weighted average of the above factors

Provide your analysis in the following JSON format:
{{
  "score": 85,
  "originality": 90,
  "quality": 80,
  "marketPotential": 85,
  "category": "{category}",
  "suggestions": ["suggestion1", "suggestion2"],
  "risks": ["risk1", "risk2"],
  "confidence": 0.9,
  "reasoning": "Detailed explanation of the scoring and analysis"
}}"""


def _clamp(value: Any, low: float, high: float, default: float) -> float:
    # missing, null, zero or non-numeric values take the default
    try:
        number = float(value) if value else default
    except (TypeError, ValueError):
        number = default
    return max(low, min(high, number))


def parse_validation(text: str) -> schemas.AIValidationResult:
    """Parse the outermost JSON object in ``text``; malformed answers yield the fallback."""

    start = text.find("{")
    end = text.rfind("}") + 1
    if start < 0 or end <= start:
        logger.warning("No JSON object in validation response")
        return fallback_validation()
    try:
        parsed = json.loads(text[start:end])
    except json.JSONDecodeError as exc:
        logger.warning("Unparseable validation response: %s", exc)
        return fallback_validation()
    if not isinstance(parsed, dict):
        return fallback_validation()

    suggestions = parsed.get("suggestions")
    risks = parsed.get("risks")
    return schemas.AIValidationResult(
        score=_clamp(parsed.get("score"), 0, 100, 0),
        originality=_clamp(parsed.get("originality"), 0, 100, 0),
        quality=_clamp(parsed.get("quality"), 0, 100, 0),
        market_potential=_clamp(parsed.get("marketPotential"), 0, 100, 0),
        category=str(parsed.get("category") or "Unknown"),
        suggestions=[str(s) for s in suggestions] if isinstance(suggestions, list) else [],
        risks=[str(r) for r in risks] if isinstance(risks, list) else [],
        confidence=_clamp(parsed.get("confidence"), 0, 1, 0.5),
        reasoning=str(parsed.get("reasoning") or "No reasoning provided"),
    )


def _labelled_value(lines: list[str], label: str) -> Optional[str]:
    """Text between the first and second colon of the first line mentioning ``label``."""

    for line in lines:
        if label in line.lower():
            parts = line.split(":")
            return parts[1].strip() if len(parts) > 1 else None
    return None


def _split_list(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_content_analysis(text: str) -> schemas.ContentAnalysis:
    lines = [line for line in text.split("\n") if line.strip()]
    sentiment = (_labelled_value(lines, "sentiment") or "neutral").lower()
    return schemas.ContentAnalysis(
        summary=_labelled_value(lines, "summary") or "No summary available",
        keywords=_split_list(_labelled_value(lines, "keyword")),
        sentiment=sentiment if sentiment in SENTIMENTS else "neutral",
        topics=_split_list(_labelled_value(lines, "topic")),
    )


class InferenceGateway:
    def __init__(self, client: Anthropic, model: str = "claude-3-5-haiku-20241022"):
        self.client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> "InferenceGateway":
        return cls(Anthropic(api_key=settings.llm_api_key), model=settings.llm_model)

    def _complete(self, system: str, prompt: str, *, temperature: float, max_tokens: int) -> str:
        response = self.client.messages.create(
            model=self.model,
            system=system,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=[{"role": "user", "content": prompt}],
        )
        return "".join(block.text for block in response.content if getattr(block, "type", "text") == "text")

    def validate_idea(
        self, title: str, description: str, category: str, content: Optional[str] = None
    ) -> schemas.AIValidationResult:
        """Score an idea. Never raises: provider or parse failures return the fallback."""

        prompt = build_validation_prompt(title, description, category, content)
        try:
            text = self._complete(VALIDATOR_SYSTEM, prompt, temperature=0.3, max_tokens=1000)
        except Exception as exc:
            logger.error("AI validation call failed: %s", exc, exc_info=True)
            return fallback_validation()
        result = parse_validation(text)
        logger.info(
            "AI validation completed title=%r category=%s score=%s confidence=%s",
            title,
            category,
            result.score,
            result.confidence,
        )
        return result

    def analyze_content(self, content: str, content_type: str) -> schemas.ContentAnalysis:
        prompt = (
            f"Analyze the following {content_type} content and provide:\n"
            "1. A brief summary\n"
            "2. Key keywords and phrases\n"
            "3. Sentiment analysis (positive/neutral/negative)\n"
            "4. Main topics and themes\n\n"
            f"Content: {content}"
        )
        try:
            text = self._complete(ANALYST_SYSTEM, prompt, temperature=0.3, max_tokens=500)
        except Exception as exc:
            logger.error("Content analysis failed: %s", exc, exc_info=True)
            raise InferenceError("Failed to analyze content") from exc
        return parse_content_analysis(text)

    def generate_metadata(self, title: str, description: str, category: str, ai_score: float) -> str:
        prompt = (
            "Generate comprehensive metadata for an IP-NFT with the following details:\n"
            f"Title: {title}\n"
            f"Description: {description}\n"
            f"Category: {category}\n"
            f"AI Score: {ai_score:g}\n\n"
            "Include relevant attributes, properties, and traits that would be valuable "
            "for an NFT marketplace."
        )
        try:
            return self._complete(METADATA_SYSTEM, prompt, temperature=0.5, max_tokens=800)
        except Exception as exc:
            logger.error("Metadata generation failed: %s", exc, exc_info=True)
            raise InferenceError("Failed to generate metadata") from exc
