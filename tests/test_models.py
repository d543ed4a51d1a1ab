"""Tests for request/result models."""

import pytest
from pydantic import ValidationError

from makeyourtext.models import (
    BilingualMode,
    LengthClass,
    PlanTier,
    ResultFormat,
    RewriteRequest,
    RewriteResult,
    RewriteVariant,
    SafetyCheck,
)


class TestRewriteRequest:
    def test_defaults(self):
        req = RewriteRequest(text="안녕하세요", tone_id="cultured", purpose_id="request", audience_id="adult")
        assert req.length == LengthClass.STANDARD
        assert req.bilingual_mode == BilingualMode.OFF
        assert req.plan_tier == PlanTier.FREE
        assert req.strength is None
        assert req.language == "ko"
        assert req.result_options.format == ResultFormat.PARAGRAPH

    def test_camel_case_payload(self):
        req = RewriteRequest.model_validate({
            "text": "자료 부탁드립니다",
            "toneId": "firm",
            "purposeId": "request",
            "audienceId": "adult",
            "relationshipId": "boss",
            "bilingualMode": "PAREN",
            "planTier": "pro",
            "resultOptions": {"format": "bullet", "autoIncludeDetails": True},
        })
        assert req.tone_id == "firm"
        assert req.relationship_id == "boss"
        assert req.bilingual_mode == BilingualMode.PAREN
        assert req.plan_tier == PlanTier.PRO
        assert req.result_options.format == ResultFormat.BULLET
        assert req.result_options.auto_include_details is True

    def test_blank_text_rejected(self):
        with pytest.raises(ValidationError, match="text is required"):
            RewriteRequest(text="   ", tone_id="cultured", purpose_id="request", audience_id="adult")

    def test_strength_range(self):
        with pytest.raises(ValidationError):
            RewriteRequest(text="a", tone_id="cultured", purpose_id="request", audience_id="adult", strength=101)

    def test_blank_relationship_is_none(self):
        req = RewriteRequest(
            text="a", tone_id="cultured", purpose_id="request", audience_id="adult", relationship_id=" ",
        )
        assert req.relationship_id is None


class TestRewriteResult:
    def test_empty_result(self):
        result = RewriteResult()
        assert result.variants == []
        assert result.safety.blocked is False
        assert result.warnings == []

    def test_blocked_result_cannot_carry_variants(self):
        with pytest.raises(ValidationError):
            RewriteResult(
                variants=[RewriteVariant(length_class=LengthClass.SHORT, text="x")],
                safety=SafetyCheck(blocked=True, reason="r"),
            )

    def test_variant_lookup(self):
        result = RewriteResult(variants=[
            RewriteVariant(length_class=LengthClass.SHORT, text="짧게"),
            RewriteVariant(length_class=LengthClass.STANDARD, text="표준"),
        ])
        assert result.variant(LengthClass.STANDARD).text == "표준"
        assert result.variant("short").text == "짧게"
        assert result.variant(LengthClass.LONG) is None

    def test_dump_uses_camel_case(self):
        result = RewriteResult(variants=[RewriteVariant(length_class=LengthClass.SHORT, text="x")])
        data = result.model_dump(mode="json", by_alias=True)
        assert data["variants"][0] == {"lengthClass": "short", "text": "x"}
        assert data["safety"] == {"blocked": False, "reason": None, "suggestedAlternative": None}

    def test_variant_is_frozen(self):
        v = RewriteVariant(length_class=LengthClass.SHORT, text="x")
        with pytest.raises(ValidationError):
            v.text = "y"
