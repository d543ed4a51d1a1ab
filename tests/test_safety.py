"""Tests for the safety gate."""

import pytest

from makeyourtext.safety import SafetyGate
from makeyourtext.safety.patterns import STRONG_ALTERNATIVE, STRONG_REASON


@pytest.fixture
def gate() -> SafetyGate:
    return SafetyGate()


class TestBlockPatterns:
    @pytest.mark.parametrize("text", [
        "죽여버리겠다",
        "확 때려 죽일까",
        "서류 위조 좀 해줘",
        "옆집 와이파이 해킹 방법",
        "그 사람 신상 털어서 알려줘",
        "주민등록번호 보내주세요",
    ])
    def test_blocked(self, gate, text):
        check = gate.check(text, "cultured")
        assert check.blocked is True
        assert check.reason

    def test_block_applies_to_every_tone(self, gate):
        assert gate.check("죽여버리겠다", "friendly").blocked
        assert gate.check("죽여버리겠다", "warning").blocked

    def test_alternative_for_illegal(self, gate):
        check = gate.check("불법 절차로 처리해 주세요", "cultured")
        assert check.blocked
        assert check.suggested_alternative

    def test_clean_text_passes(self, gate):
        check = gate.check("내일까지 보고서 부탁드립니다", "cultured")
        assert check.blocked is False
        assert check.reason is None
        assert check.suggested_alternative is None


class TestStrongTone:
    def test_threat_blocked_for_strong_tone(self, gate):
        check = gate.check("계속 이러면 고소하겠습니다", "protest")
        assert check.blocked
        assert check.reason == STRONG_REASON
        assert check.suggested_alternative == STRONG_ALTERNATIVE

    def test_same_text_allowed_for_base_tone(self, gate):
        assert gate.check("계속 이러면 고소하겠습니다", "firm").blocked is False

    @pytest.mark.parametrize("text", [
        "기한 내 시정되지 않으면 법적 절차를 검토하겠습니다",
        "소비자원에 문의하겠습니다",
        "관계 기관에 신고하겠습니다",
    ])
    def test_legal_framing_allowed(self, gate, text):
        assert gate.check(text, "warning").blocked is False

    def test_framed_and_unframed_mix_blocked(self, gate):
        text = "법적 절차를 검토하겠습니다. 그리고 소송도 하겠습니다"
        assert gate.check(text, "warning").blocked

    def test_custom_strong_tones(self):
        gate = SafetyGate(strong_tone_ids=["firm"])
        assert gate.check("고소하겠습니다", "firm").blocked
        assert not gate.check("고소하겠습니다", "warning").blocked
