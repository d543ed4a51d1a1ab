"""Tests for the repair passes."""

from makeyourtext.models.presets import Register
from makeyourtext.models.request import BilingualMode, LengthClass
from makeyourtext.pipeline.repairs import (
    enforce_context_integrity,
    enforce_formality,
    fallback_text,
    repair_particle_fragments,
    unify_style,
    validate_bilingual_mode,
)
from makeyourtext.pipeline.stages import WARNING_CONSEQUENCE_CLAUSE, WARNING_DEADLINE_CLAUSE


class TestUnifyStyle:
    def test_mixed_to_formal(self, make_ctx):
        ctx = make_ctx(tone_id="cultured")
        assert unify_style("확인했습니다. 감사해요.", ctx) == "확인했습니다. 감사합니다."

    def test_mixed_to_polite(self, make_ctx):
        ctx = make_ctx(tone_id="friendly")
        assert unify_style("확인했습니다. 감사해요.", ctx) == "확인했어요. 감사해요."

    def test_consistent_untouched(self, make_ctx):
        ctx = make_ctx(tone_id="friendly")
        assert unify_style("확인했습니다. 감사합니다.", ctx) == "확인했습니다. 감사합니다."


class TestContextIntegrity:
    def test_drops_unsupported_clauses(self, make_ctx):
        ctx = make_ctx("회의 정리 부탁드립니다")
        text = f"회의 정리 부탁드립니다. {WARNING_DEADLINE_CLAUSE} {WARNING_CONSEQUENCE_CLAUSE}"
        assert enforce_context_integrity(text, ctx) == "회의 정리 부탁드립니다."

    def test_keeps_supported_deadline(self, make_ctx):
        ctx = make_ctx("내일까지 회의 정리 부탁드립니다")
        text = "회의 정리 부탁드립니다. 내일까지 회신 부탁드립니다."
        assert enforce_context_integrity(text, ctx) == text

    def test_consequence_dropped_when_only_temporal_present(self, make_ctx):
        ctx = make_ctx("내일까지 회의 정리 부탁드립니다")
        text = f"회의 정리 부탁드립니다. {WARNING_CONSEQUENCE_CLAUSE}"
        assert enforce_context_integrity(text, ctx) == "회의 정리 부탁드립니다."

    def test_keeps_sentence_with_foreign_time(self, make_ctx):
        ctx = make_ctx("회의는 3pm에 시작합니다. 자료를 준비해 주세요")
        text = "회의는 오후 3시에 시작합니다. 자료를 준비해 주시기 바랍니다."
        assert enforce_context_integrity(text, ctx) == text

    def test_converted_input_counts_as_source(self, make_ctx):
        ctx = make_ctx("Meeting at 3pm")
        assert ctx.cue_sources == ("Meeting at 3pm", "회의 오후 3시")
        assert ctx.original_has_temporal
        assert enforce_context_integrity("회의 오후 3시 부탁드립니다.", ctx) == "회의 오후 3시 부탁드립니다."

    def test_foreign_input_without_cue_still_drops_added_deadline(self, make_ctx):
        ctx = make_ctx("please check the file")
        text = f"파일 확인 부탁드립니다. {WARNING_DEADLINE_CLAUSE}"
        assert enforce_context_integrity(text, ctx) == "파일 확인 부탁드립니다."


class TestFormality:
    def test_locked_tone_forced_formal(self, make_ctx):
        ctx = make_ctx(tone_id="cultured")
        assert enforce_formality("자료 보내 줄래?", ctx) == "자료 보내 주시겠습니까?"

    def test_polite_tone_untouched(self, make_ctx):
        ctx = make_ctx(tone_id="friendly")
        assert enforce_formality("자료 보내 줄래?", ctx) == "자료 보내 줄래?"


class TestParticleFragments:
    def test_fragment_uses_fallback(self, make_ctx):
        ctx = make_ctx("회의 정리 부탁드립니다")
        assert repair_particle_fragments("을", ctx) == (
            "'회의 정리 부탁드립니다' 관련하여 아래 내용을 확인 부탁드립니다."
        )

    def test_empty_candidate_uses_fallback(self, make_ctx):
        ctx = make_ctx("회의 정리 부탁드립니다")
        assert repair_particle_fragments("", ctx).startswith("'회의 정리 부탁드립니다'")

    def test_polite_fallback(self):
        out = fallback_text("회의 정리 부탁드립니다", Register.POLITE)
        assert out == "'회의 정리 부탁드립니다' 관련하여 아래 내용을 확인 부탁드려요."

    def test_fallback_seed_is_truncated(self):
        out = fallback_text("아주 긴 원문이라서 따옴표 안에 전부 들어가지는 않을 문장입니다", Register.FORMAL)
        seed = out.split("'")[1]
        assert len(seed) <= 20
        assert seed.endswith("…")

    def test_leading_particle_trimmed(self, make_ctx):
        ctx = make_ctx()
        assert repair_particle_fragments("를 확인 부탁드립니다.", ctx) == "확인 부탁드립니다."

    def test_normal_text_untouched(self, make_ctx):
        ctx = make_ctx()
        assert repair_particle_fragments("이 문서를 확인해 주세요.", ctx) == "이 문서를 확인해 주세요."


class TestBilingualValidation:
    def test_off_appends_missing_gloss(self, make_ctx):
        ctx = make_ctx("meeting 자료 부탁드립니다")
        assert validate_bilingual_mode("자료 부탁드립니다.", ctx) == "자료 부탁드립니다. (회의)"

    def test_off_gloss_present(self, make_ctx):
        ctx = make_ctx("meeting 자료 부탁드립니다")
        assert validate_bilingual_mode("회의 자료 부탁드립니다.", ctx) == "회의 자료 부탁드립니다."

    def test_off_short_not_appended(self, make_ctx):
        ctx = make_ctx("meeting 자료 부탁드립니다", length=LengthClass.SHORT)
        assert validate_bilingual_mode("자료 부탁드립니다.", ctx) == "자료 부탁드립니다."

    def test_paren_enforced(self, make_ctx):
        ctx = make_ctx("meeting 자료 부탁드립니다", bilingual_mode=BilingualMode.PAREN)
        out = validate_bilingual_mode("회의 (meeting) 자료 (meeting) 부탁드립니다.", ctx)
        assert out == "회의 (meeting) 자료 부탁드립니다."
