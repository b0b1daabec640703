from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from ideaforge.services.inference import (
    InferenceError,
    InferenceGateway,
    build_validation_prompt,
    parse_content_analysis,
    parse_validation,
)


def _reply(text):
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=text)])


def make_gateway(text=None, error=None):
    client = MagicMock()
    if error is not None:
        client.messages.create.side_effect = error
    else:
        client.messages.create.return_value = _reply(text)
    return InferenceGateway(client, model="test-model"), client


def test_validate_idea_parses_embedded_json():
    text = 'Here you go:\n{"score": 85, "originality": 90, "quality": 80, "marketPotential": 70, ' \
        '"category": "Energy", "suggestions": ["Patent it"], "risks": ["Cost"], ' \
        '"confidence": 0.9, "reasoning": "Novel"}\nThanks'
    gateway, client = make_gateway(text)
    result = gateway.validate_idea("Tiles", "Solar roof tiles", "Energy")
    assert result.score == 85
    assert result.market_potential == 70
    assert result.suggestions == ["Patent it"]
    assert result.reasoning == "Novel"
    kwargs = client.messages.create.call_args.kwargs
    assert kwargs["model"] == "test-model"
    assert kwargs["temperature"] == 0.3
    assert kwargs["max_tokens"] == 1000
    assert "intellectual property" in kwargs["system"]


def test_validate_idea_clamps_out_of_range_values():
    result = parse_validation('{"score": 150, "originality": -5, "confidence": 5}')
    assert result.score == 100
    assert result.originality == 0
    assert result.confidence == 1


def test_validate_idea_defaults():
    result = parse_validation('{"suggestions": "not a list"}')
    assert result.score == 0
    assert result.confidence == 0.5
    assert result.category == "Unknown"
    assert result.suggestions == []
    assert result.risks == []
    assert result.reasoning == "No reasoning provided"


@pytest.mark.parametrize("text", ["no json here", "{not: valid}", "} backwards {"])
def test_validate_idea_falls_back_on_bad_output(text):
    gateway, _ = make_gateway(text)
    result = gateway.validate_idea("Tiles", "Solar roof tiles", "Energy")
    assert result.score == 50
    assert result.confidence == 0.1
    assert result.suggestions == ["Unable to analyze - manual review required"]
    assert result.risks == ["Analysis failed - requires human validation"]


def test_validate_idea_absorbs_provider_errors():
    gateway, _ = make_gateway(error=RuntimeError("overloaded"))
    result = gateway.validate_idea("Tiles", "Solar roof tiles", "Energy")
    assert result.reasoning == "AI analysis failed, manual review required"


def test_prompt_includes_content_only_when_given():
    assert "Content: body" in build_validation_prompt("T", "D", "C", "body")
    assert "Content:" not in build_validation_prompt("T", "D", "C")
    assert '"category": "C"' in build_validation_prompt("T", "D", "C")


def test_parse_content_analysis():
    text = (
        "Summary: Roof tiles that make power\n"
        "\n"
        "Keywords: solar, roofing , energy\n"
        "Sentiment: Positive\n"
        "Topics: renewables, construction"
    )
    result = parse_content_analysis(text)
    assert result.summary == "Roof tiles that make power"
    assert result.keywords == ["solar", "roofing", "energy"]
    assert result.sentiment == "positive"
    assert result.topics == ["renewables", "construction"]


def test_parse_content_analysis_keeps_text_before_second_colon():
    result = parse_content_analysis("Summary: Ratio is 3:1 in favour")
    assert result.summary == "Ratio is 3"


def test_parse_content_analysis_defaults():
    result = parse_content_analysis("Sentiment: WEIRD\nnothing else")
    assert result.summary == "No summary available"
    assert result.keywords == []
    assert result.topics == []
    assert result.sentiment == "neutral"


def test_analyze_content_failure_raises():
    gateway, _ = make_gateway(error=RuntimeError("timeout"))
    with pytest.raises(InferenceError) as exc:
        gateway.analyze_content("text", "article")
    assert exc.value.message == "Failed to analyze content"


def test_generate_metadata_returns_raw_text():
    gateway, client = make_gateway("name: Tiles\ntraits: solar")
    assert gateway.generate_metadata("Tiles", "Solar roof tiles", "Energy", 82) == "name: Tiles\ntraits: solar"
    kwargs = client.messages.create.call_args.kwargs
    assert kwargs["temperature"] == 0.5
    assert kwargs["max_tokens"] == 800
    assert "AI Score: 82" in kwargs["messages"][0]["content"]


def test_generate_metadata_failure_raises():
    gateway, _ = make_gateway(error=RuntimeError("timeout"))
    with pytest.raises(InferenceError):
        gateway.generate_metadata("Tiles", "Solar roof tiles", "Energy", 82)
