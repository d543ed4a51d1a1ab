"""Tests for the variant assembler."""

import re

import pytest

from makeyourtext.config import PipelineConfig
from makeyourtext.models.request import (
    BilingualMode,
    LengthClass,
    PlanTier,
    ResultOptions,
)
from makeyourtext.pipeline.cues import TEMPORAL_CUE_RE
from makeyourtext.pipeline.orchestrator import (
    REPAIR_PASSES,
    TRANSFORM_STAGES,
    RewriteOrchestrator,
    guard_short_budget,
)
from makeyourtext.pipeline.registers import is_mixed, registers_in
from makeyourtext.pipeline.stages import ESCALATION_RE

ALL_TONES = [
    "cultured", "friendly", "firm", "warm", "apology",
    "humorous", "warning", "protest", "notice-formal",
]
PURPOSES = ["request", "notice", "apology", "review", "complaint"]
TEXTS = [
    "내일까지 보고서 좀 보내줘",
    "회의 자료 공유 부탁드립니다",
    "배송이 늦어서 불편했어요",
]

_FOREIGN_PAREN_RE = re.compile(r"\([^()]*[A-Za-z][^()]*\)")


class TestPipelineShape:
    def test_stage_counts(self):
        assert len(TRANSFORM_STAGES) == 10
        assert len(REPAIR_PASSES) == 5

    def test_stage_order(self):
        names = [s.__name__ for s in TRANSFORM_STAGES]
        assert names[0] == "normalize_bilingual"
        assert names[-1] == "enforce_language_policy"
        assert REPAIR_PASSES[-1].__name__ == "validate_bilingual_mode"


class TestScenarios:
    def test_deadline_preserved(self, orchestrator, make_request):
        request = make_request("내일까지 보고서 부탁드립니다", tone_id="firm")
        result = orchestrator.rewrite(request)
        standard = result.variant(LengthClass.STANDARD)
        assert standard.text == "내일까지 보고서 요청드립니다"
        assert "내일까지" in standard.text

    @pytest.mark.parametrize("tone_id", ALL_TONES)
    def test_no_invented_deadline(self, orchestrator, make_request, tone_id):
        request = make_request(
            "회의 정리 부탁드립니다",
            tone_id=tone_id,
            length=LengthClass.LONG,
            plan_tier=PlanTier.PRO,
            result_options=ResultOptions(auto_include_details=True),
        )
        result = orchestrator.rewrite(request)
        assert len(result.variants) == 3
        for variant in result.variants:
            assert not TEMPORAL_CUE_RE.search(variant.text), variant.text
        assert "연락" in result.variant(LengthClass.LONG).text

    def test_threat_blocked(self, orchestrator, make_request):
        result = orchestrator.rewrite(make_request("죽여버리겠다"))
        assert result.safety.blocked is True
        assert result.safety.reason
        assert result.variants == []

    def test_strong_tone_request_downgraded(self, orchestrator, make_request):
        request = make_request("보고서 제출을 요구합니다", tone_id="protest", plan_tier=PlanTier.PRO)
        result = orchestrator.rewrite(request)
        assert result.variant(LengthClass.STANDARD).text == "보고서 제출을 요청드립니다. 잘 부탁드립니다."
        for variant in result.variants:
            assert not ESCALATION_RE.search(variant.text), variant.text

    def test_paren_single_gloss(self, orchestrator, make_request):
        request = make_request(
            "내일 회의 자료 부탁드립니다. Please check the attached file.",
            bilingual_mode=BilingualMode.PAREN,
        )
        text = orchestrator.rewrite(request).variant(LengthClass.STANDARD).text
        assert len(_FOREIGN_PAREN_RE.findall(text)) == 1
        assert text.count("Please check the attached file") == 1

    def test_unknown_preset(self, orchestrator, make_request):
        result = orchestrator.rewrite(make_request(tone_id="no-such-tone"))
        assert result.variants == []
        assert result.safety.blocked is False

    def test_unknown_relationship_ignored(self, orchestrator, make_request):
        result = orchestrator.rewrite(make_request(relationship_id="stranger"))
        assert len(result.variants) == 2


class TestVariantSelection:
    def test_free_plan(self, orchestrator, make_request):
        result = orchestrator.rewrite(make_request(length=LengthClass.LONG))
        assert [v.length_class for v in result.variants] == [LengthClass.STANDARD, LengthClass.LONG]

    def test_pro_plan(self, orchestrator, make_request):
        result = orchestrator.rewrite(make_request(plan_tier=PlanTier.PRO))
        assert [v.length_class for v in result.variants] == [
            LengthClass.SHORT, LengthClass.STANDARD, LengthClass.LONG,
        ]

    def test_bypass_env(self, orchestrator, make_request, monkeypatch):
        monkeypatch.setenv("BYPASS_LIMITS", "true")
        assert len(orchestrator.rewrite(make_request()).variants) == 3

    def test_bypass_config(self, catalog, make_request):
        orchestrator = RewriteOrchestrator(catalog, config=PipelineConfig(bypass_plan_limits=True))
        assert len(orchestrator.rewrite(make_request()).variants) == 3


class TestInvariants:
    @pytest.mark.parametrize("tone_id", ALL_TONES)
    @pytest.mark.parametrize("purpose_id", PURPOSES)
    @pytest.mark.parametrize("text", TEXTS)
    def test_register_never_mixed(self, orchestrator, make_request, tone_id, purpose_id, text):
        request = make_request(text, tone_id=tone_id, purpose_id=purpose_id, plan_tier=PlanTier.PRO)
        result = orchestrator.rewrite(request)
        tone = orchestrator.catalog.tone(tone_id)
        for variant in result.variants:
            assert variant.text
            assert not is_mixed(variant.text), variant.text
            if tone.formal_locked:
                assert "informal" not in registers_in(variant.text), variant.text

    @pytest.mark.parametrize("mode", list(BilingualMode))
    def test_short_within_budget(self, orchestrator, make_request, mode):
        text = (
            "다음 주 월요일 오전 회의 전까지 분기별 매출 보고서와 관련 자료를 모두 정리해서 "
            "공유해 주시면 감사하겠습니다 please share the quarterly sales report"
        )
        result = orchestrator.rewrite(make_request(text, bilingual_mode=mode))
        short = result.variant(LengthClass.SHORT)
        assert len(short.text) <= 50

    def test_off_mode_has_no_latin(self, orchestrator, make_request):
        request = make_request("내일 meeting 전에 report 부탁드립니다", plan_tier=PlanTier.PRO)
        for variant in orchestrator.rewrite(request).variants:
            assert not re.search(r"[A-Za-z]", variant.text), variant.text

    def test_twolines_layout(self, orchestrator, make_request):
        request = make_request(
            "회의 자료 부탁드립니다.\nPlease check the file.",
            bilingual_mode=BilingualMode.TWOLINES,
        )
        text = orchestrator.rewrite(request).variant(LengthClass.STANDARD).text
        lines = text.split("\n")
        assert lines[-1] == "Please check the file."
        assert not any(re.search(r"[A-Za-z]", line) for line in lines[:-1])
        assert text.count("Please check the file") == 1

    def test_foreign_time_sentence_survives(self, orchestrator, make_request):
        request = make_request("회의는 3pm에 시작합니다. 자료를 준비해 주세요", plan_tier=PlanTier.PRO)
        for variant in orchestrator.rewrite(request).variants:
            assert "(" not in variant.text, variant.text
        for length in (LengthClass.STANDARD, LengthClass.LONG):
            assert "회의는 오후 3시에 시작합니다" in orchestrator.rewrite(request).variant(length).text

    def test_twolines_foreign_only_input(self, orchestrator, make_request):
        request = make_request(
            "Meeting at 3pm",
            bilingual_mode=BilingualMode.TWOLINES,
            plan_tier=PlanTier.PRO,
        )
        result = orchestrator.rewrite(request)
        for length in (LengthClass.STANDARD, LengthClass.LONG):
            lines = result.variant(length).text.split("\n")
            assert lines[-1] == "Meeting at 3pm"
            assert "회의 오후 3시" in lines[0]

    def test_paren_deadline_not_reglossed(self, orchestrator, make_request):
        request = make_request(
            "please send the file by tomorrow",
            bilingual_mode=BilingualMode.PAREN,
            length=LengthClass.LONG,
            plan_tier=PlanTier.PRO,
            result_options=ResultOptions(auto_include_details=True),
        )
        text = orchestrator.rewrite(request).variant(LengthClass.LONG).text
        assert "기한(내일)" in text
        assert text.lower().count("tomorrow") == 1

    def test_plain_imperative_softened(self, orchestrator, make_request):
        for variant in orchestrator.rewrite(make_request("서류를 보내세요")).variants:
            assert "보내 주시겠" in variant.text, variant.text
            assert not re.search(r"보내(?:세요|십시오)", variant.text)

    def test_no_invented_consequence(self, orchestrator, make_request):
        request = make_request(
            "층간 소음 문제입니다",
            tone_id="warning",
            purpose_id="complaint",
            plan_tier=PlanTier.PRO,
        )
        for variant in orchestrator.rewrite(request).variants:
            assert "조치" not in variant.text
            assert "기한" not in variant.text


class TestAmbiguityWarnings:
    def test_enabled(self, orchestrator, make_request):
        request = make_request(
            "나중에 적당히 정리해 주세요",
            result_options=ResultOptions(ambiguity_warning=True),
        )
        assert len(orchestrator.rewrite(request).warnings) == 2

    def test_disabled_by_default(self, orchestrator, make_request):
        assert orchestrator.rewrite(make_request("나중에 적당히 정리해 주세요")).warnings == []


class TestGuardShortBudget:
    def test_fits(self):
        assert guard_short_budget("짧습니다.", 50) == "짧습니다."

    def test_drops_gloss_lines_first(self):
        text = "회의 자료 부탁드립니다.\n" + "Please check the attached meeting agenda before tomorrow"
        assert guard_short_budget(text, 50) == "회의 자료 부탁드립니다."

    def test_truncates(self):
        out = guard_short_budget("가나다 " * 30, 20)
        assert len(out) <= 20
