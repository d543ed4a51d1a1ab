"""Framework-free request handlers for the HTTP boundary.

Each handler takes the decoded JSON body and returns ``(status, body)``.
Blocked and unresolved-preset results are successful (200) responses.
"""

from __future__ import annotations

import logging
import time

from pydantic import ValidationError

from makeyourtext.logging.models import RewriteLog
from makeyourtext.logging.usage_store import UsageStore
from makeyourtext.models.request import RewriteRequest
from makeyourtext.models.result import RewriteResult
from makeyourtext.pipeline.batch import BatchRewriter
from makeyourtext.pipeline.orchestrator import RewriteOrchestrator

logger = logging.getLogger(__name__)

TEXT_REQUIRED = "text is required"

# Keys a batch template decides; callers cannot override them.
_TEMPLATE_KEYS = frozenset({
    "text", "templateIds", "template_ids", "toneId", "tone_id", "purposeId",
    "purpose_id", "audienceId", "audience_id", "relationshipId",
    "relationship_id", "format",
})


def _error(status: int, message: str) -> tuple[int, dict]:
    return status, {"ok": False, "error": message}


def _text_missing(payload: dict) -> bool:
    text = payload.get("text")
    return not isinstance(text, str) or not text.strip()


def _validation_message(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def _record(store: UsageStore | None, log: RewriteLog) -> None:
    if store is None:
        return
    try:
        store.save_log(log)
    except Exception:
        logger.exception("Failed to save usage log")


def _log_for(
    request: RewriteRequest,
    result: RewriteResult | None,
    started: float,
    error: str | None = None,
) -> RewriteLog:
    return RewriteLog(
        tone_id=request.tone_id,
        purpose_id=request.purpose_id,
        audience_id=request.audience_id,
        relationship_id=request.relationship_id,
        plan_tier=request.plan_tier.value,
        variant_count=len(result.variants) if result else 0,
        blocked=bool(result and result.safety.blocked),
        input_chars=len(request.text),
        elapsed_seconds=round(time.monotonic() - started, 4),
        language=request.language,
        success=result is not None,
        error_message=error,
    )


def handle_rewrite(
    payload: dict,
    orchestrator: RewriteOrchestrator,
    usage_store: UsageStore | None = None,
) -> tuple[int, dict]:
    if not isinstance(payload, dict) or _text_missing(payload):
        return _error(400, TEXT_REQUIRED)
    try:
        request = RewriteRequest.model_validate(payload)
    except ValidationError as exc:
        return _error(400, _validation_message(exc))

    started = time.monotonic()
    try:
        result = orchestrator.rewrite(request)
    except Exception as exc:
        logger.exception("Rewrite failed")
        _record(usage_store, _log_for(request, None, started, error=str(exc)))
        return _error(500, "internal error")

    _record(usage_store, _log_for(request, result, started))
    return 200, {"ok": True, **result.model_dump(mode="json", by_alias=True)}


async def handle_batch(
    payload: dict,
    rewriter: BatchRewriter,
) -> tuple[int, dict]:
    """Batch variant of :func:`handle_rewrite`.

    ``payload`` carries ``text``, optional ``templateIds`` and the shared
    request options (``strength``, ``bilingualMode``, ``planTier`` ...).
    """
    if not isinstance(payload, dict) or _text_missing(payload):
        return _error(400, TEXT_REQUIRED)
    options = {k: v for k, v in payload.items() if k not in _TEMPLATE_KEYS}
    template_ids = payload.get("templateIds", payload.get("template_ids"))
    if template_ids is not None and not isinstance(template_ids, list):
        return _error(400, "templateIds must be a list")
    try:
        # Validate shared options once so a bad option is a client error,
        # not one error token per template.
        RewriteRequest.model_validate({
            "text": payload["text"],
            "toneId": "-",
            "purposeId": "-",
            "audienceId": "-",
            **options,
        })
    except ValidationError as exc:
        return _error(400, _validation_message(exc))

    try:
        items = await rewriter.run(payload["text"], template_ids, **options)
    except Exception:
        logger.exception("Batch rewrite failed")
        return _error(500, "internal error")
    return 200, {
        "ok": True,
        "items": [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in items],
    }
