"""Template batch mode: one input rewritten against many templates."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable

from makeyourtext.models.presets import Template
from makeyourtext.models.request import RewriteRequest
from makeyourtext.models.result import BatchItemResult
from makeyourtext.pipeline.orchestrator import RewriteOrchestrator
from makeyourtext.presets.templates import default_templates

logger = logging.getLogger(__name__)


class BatchRewriter:
    """Runs independent rewrites per template; one failure never aborts the rest."""

    def __init__(
        self,
        orchestrator: RewriteOrchestrator,
        templates: Iterable[Template] | None = None,
        *,
        max_templates: int = 30,
    ):
        self.orchestrator = orchestrator
        self.templates = {t.id: t for t in (templates if templates is not None else default_templates())}
        self.max_templates = max_templates

    def build_request(self, text: str, template: Template, **options) -> RewriteRequest:
        return RewriteRequest(
            text=text,
            tone_id=template.tone_id,
            purpose_id=template.purpose_id,
            audience_id=template.audience_id,
            relationship_id=template.relationship_id,
            format=template.format,
            **options,
        )

    def _run_one(self, text: str, template_id: str, options: dict) -> BatchItemResult:
        template = self.templates.get(template_id)
        if template is None:
            raise KeyError(f"Unknown template: {template_id}")
        request = self.build_request(text, template, **options)
        return BatchItemResult(
            template_id=template_id,
            result=self.orchestrator.rewrite(request),
        )

    async def run(
        self,
        text: str,
        template_ids: list[str] | None = None,
        **options,
    ) -> list[BatchItemResult]:
        """Rewrite ``text`` for each template id (all templates when None).

        Extra keyword options (strength, length, bilingual_mode, plan_tier ...)
        are passed to every request.
        """
        ids = list(template_ids) if template_ids is not None else list(self.templates)
        ids = ids[: self.max_templates]

        outcomes = await asyncio.gather(
            *(asyncio.to_thread(self._run_one, text, tid, options) for tid in ids),
            return_exceptions=True,
        )

        results: list[BatchItemResult] = []
        for tid, outcome in zip(ids, outcomes):
            if isinstance(outcome, BaseException):
                logger.error("Batch item %s failed: %s", tid, outcome, exc_info=outcome)
                message = outcome.args[0] if isinstance(outcome, KeyError) and outcome.args else str(outcome)
                results.append(BatchItemResult(template_id=tid, error=str(message)))
            else:
                results.append(outcome)
        return results
