"""Shared test fixtures."""

from __future__ import annotations

import pytest

from makeyourtext.config import BYPASS_ENV_VAR, PipelineConfig
from makeyourtext.models.request import LengthClass, RewriteRequest
from makeyourtext.pipeline.context import RewriteContext
from makeyourtext.pipeline.orchestrator import RewriteOrchestrator
from makeyourtext.presets.catalog import PresetCatalog, load_catalog


@pytest.fixture(autouse=True)
def _no_limit_bypass(monkeypatch):
    """Plan limits apply unless a test opts out."""
    monkeypatch.delenv(BYPASS_ENV_VAR, raising=False)


@pytest.fixture
def catalog() -> PresetCatalog:
    return load_catalog()


@pytest.fixture
def orchestrator(catalog) -> RewriteOrchestrator:
    return RewriteOrchestrator(catalog, config=PipelineConfig())


@pytest.fixture
def make_request():
    def _make(text: str = "회의 정리 부탁드립니다", **overrides) -> RewriteRequest:
        data = {
            "text": text,
            "tone_id": "cultured",
            "purpose_id": "request",
            "audience_id": "adult",
            **overrides,
        }
        return RewriteRequest(**data)

    return _make


@pytest.fixture
def make_ctx(catalog, make_request):
    """Build a RewriteContext from preset ids, the way the orchestrator does."""

    def _make(
        text: str = "회의 정리 부탁드립니다",
        length: LengthClass = LengthClass.STANDARD,
        **overrides,
    ) -> RewriteContext:
        request = make_request(text, **overrides)
        return RewriteContext.build(
            request,
            tone=catalog.tone(request.tone_id),
            purpose=catalog.purpose(request.purpose_id),
            audience=catalog.audience(request.audience_id),
            relationship=catalog.relationship(request.relationship_id),
            length=length,
        )

    return _make
