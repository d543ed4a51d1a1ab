"""Tests for template batch mode."""

import pytest

from makeyourtext.models.request import PlanTier
from makeyourtext.pipeline.batch import BatchRewriter
from makeyourtext.presets.templates import generate_templates


@pytest.fixture
def rewriter(orchestrator, catalog) -> BatchRewriter:
    return BatchRewriter(orchestrator, generate_templates(catalog, 10), max_templates=10)


class TestBatchRewriter:
    def test_build_request_uses_template(self, rewriter):
        template = rewriter.templates["template-1"]
        request = rewriter.build_request("자료 부탁드립니다", template, plan_tier=PlanTier.PRO)
        assert request.tone_id == template.tone_id
        assert request.purpose_id == template.purpose_id
        assert request.audience_id == template.audience_id
        assert request.format.value == template.format
        assert request.plan_tier == PlanTier.PRO

    @pytest.mark.asyncio
    async def test_runs_selected_templates(self, rewriter):
        items = await rewriter.run("회의 자료 부탁드립니다", ["template-1", "template-3"])
        assert [item.template_id for item in items] == ["template-1", "template-3"]
        for item in items:
            assert item.error is None
            assert item.result.variants

    @pytest.mark.asyncio
    async def test_all_templates_by_default(self, rewriter):
        items = await rewriter.run("회의 자료 부탁드립니다")
        assert len(items) == 10

    @pytest.mark.asyncio
    async def test_unknown_template_is_isolated(self, rewriter):
        items = await rewriter.run("회의 자료 부탁드립니다", ["template-1", "missing", "template-2"])
        assert items[1].template_id == "missing"
        assert items[1].result is None
        assert items[1].error == "Unknown template: missing"
        assert items[0].result is not None
        assert items[2].result is not None

    @pytest.mark.asyncio
    async def test_failure_does_not_abort_batch(self, rewriter, monkeypatch):
        original = rewriter.orchestrator.rewrite

        def flaky(request):
            if request.tone_id == rewriter.templates["template-1"].tone_id:
                raise RuntimeError("boom")
            return original(request)

        monkeypatch.setattr(rewriter.orchestrator, "rewrite", flaky)
        items = await rewriter.run("회의 자료 부탁드립니다", ["template-1"])
        assert items[0].error == "boom"

    @pytest.mark.asyncio
    async def test_max_templates(self, orchestrator, catalog):
        rewriter = BatchRewriter(orchestrator, generate_templates(catalog, 10), max_templates=3)
        items = await rewriter.run("회의 자료 부탁드립니다")
        assert len(items) == 3

    @pytest.mark.asyncio
    async def test_shared_options(self, rewriter):
        items = await rewriter.run("회의 자료 부탁드립니다", ["template-1"], plan_tier=PlanTier.PRO)
        assert len(items[0].result.variants) == 3
