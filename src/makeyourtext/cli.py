"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
import time

from dotenv import load_dotenv

load_dotenv()

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from makeyourtext.config import AppConfig, load_config
from makeyourtext.logging.models import RewriteLog
from makeyourtext.logging.usage_store import UsageStore
from makeyourtext.models.request import (
    BilingualMode,
    FormatOption,
    LengthClass,
    PlanTier,
    ResultFormat,
    ResultOptions,
    RewriteRequest,
)
from makeyourtext.pipeline.batch import BatchRewriter
from makeyourtext.pipeline.orchestrator import RewriteOrchestrator
from makeyourtext.presets.catalog import load_catalog
from makeyourtext.presets.templates import generate_templates
from makeyourtext.speech import normalize_for_tts, to_ssml, voice_profile

app = typer.Typer(
    name="makeyourtext",
    help="톤/대상/목적에 맞춘 문장 다듬기",
    no_args_is_help=True,
)
console = Console()

LENGTH_LABELS = {
    LengthClass.SHORT: "짧게",
    LengthClass.STANDARD: "표준",
    LengthClass.LONG: "자세히",
}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="디버그 로그 출력"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _orchestrator() -> tuple[RewriteOrchestrator, AppConfig]:
    config = load_config()
    catalog = load_catalog(config.catalog.presets_path)
    return RewriteOrchestrator(catalog, config=config.pipeline), config


@app.command()
def rewrite(
    text: str = typer.Argument(help="다듬을 원문"),
    tone: str = typer.Option("cultured", "--tone", "-t", help="톤 ID"),
    purpose: str = typer.Option("request", "--purpose", "-p", help="목적 ID"),
    audience: str = typer.Option("adult", "--audience", "-a", help="대상 ID"),
    relationship: str = typer.Option(None, "--relationship", "-r", help="관계 ID"),
    strength: int = typer.Option(None, "--strength", "-s", min=0, max=100, help="부드럽게(0) ~ 단호하게(100)"),
    length: LengthClass = typer.Option(LengthClass.STANDARD, "--length", "-l", help="요청 길이"),
    format: FormatOption = typer.Option(FormatOption.MESSAGE, "--format", "-f", help="message | email"),
    bilingual: BilingualMode = typer.Option(BilingualMode.OFF, "--bilingual", "-b", help="OFF | PAREN | TWOLINES"),
    plan: PlanTier = typer.Option(PlanTier.FREE, "--plan", help="요금제"),
    bullet: bool = typer.Option(False, "--bullet", help="글머리표 형식"),
    details: bool = typer.Option(False, "--details", help="기한/배경 문장 자동 포함"),
    warn: bool = typer.Option(False, "--warn", help="모호한 표현 경고"),
    as_json: bool = typer.Option(False, "--json", help="JSON으로 출력"),
) -> None:
    """원문을 선택한 톤/대상/목적에 맞게 다시 씁니다."""
    orchestrator, config = _orchestrator()
    try:
        request = RewriteRequest(
            text=text,
            tone_id=tone,
            purpose_id=purpose,
            audience_id=audience,
            relationship_id=relationship,
            strength=strength,
            length=length,
            format=format,
            bilingual_mode=bilingual,
            plan_tier=plan,
            result_options=ResultOptions(
                format=ResultFormat.BULLET if bullet else ResultFormat.PARAGRAPH,
                ambiguity_warning=warn,
                auto_include_details=details,
            ),
        )
    except ValidationError as e:
        console.print(f"[red]잘못된 요청입니다: {e.errors()[0]['msg']}[/red]")
        raise typer.Exit(1)

    started = time.monotonic()
    result = orchestrator.rewrite(request)
    elapsed = time.monotonic() - started

    if config.usage.enabled:
        store = UsageStore(config.usage.resolved_db_path)
        store.save_log(RewriteLog(
            tone_id=tone,
            purpose_id=purpose,
            audience_id=audience,
            relationship_id=relationship,
            plan_tier=plan.value,
            variant_count=len(result.variants),
            blocked=result.safety.blocked,
            input_chars=len(text),
            elapsed_seconds=round(elapsed, 4),
        ))

    if as_json:
        typer.echo(json.dumps(result.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
        return

    if result.safety.blocked:
        console.print(Panel(
            f"{result.safety.reason}\n\n[dim]대안: {result.safety.suggested_alternative or '-'}[/dim]",
            title="안전 검사에서 차단됨",
            border_style="red",
        ))
        raise typer.Exit(2)

    if not result.variants:
        console.print("[yellow]결과가 없습니다. 톤/목적/대상 ID를 확인하세요.[/yellow]")
        return

    for variant in result.variants:
        console.print(Panel(
            variant.text,
            title=LENGTH_LABELS[variant.length_class],
            border_style="blue",
        ))
    for warning in result.warnings:
        console.print(f"[yellow]주의: {warning}[/yellow]")


@app.command()
def batch(
    text: str = typer.Argument(help="다듬을 원문"),
    template: list[str] = typer.Option(None, "--template", help="템플릿 ID (여러 번 지정 가능)"),
    plan: PlanTier = typer.Option(PlanTier.FREE, "--plan", help="요금제"),
) -> None:
    """하나의 원문을 여러 템플릿으로 한 번에 다시 씁니다."""
    orchestrator, config = _orchestrator()
    rewriter = BatchRewriter(
        orchestrator,
        generate_templates(orchestrator.catalog, config.batch.max_templates),
        max_templates=config.batch.max_templates,
    )
    with console.status("템플릿별 변환 중..."):
        items = asyncio.run(rewriter.run(text, template or None, plan_tier=plan))

    table = Table(title=f"템플릿 결과 ({len(items)}개)")
    table.add_column("템플릿", style="bold")
    table.add_column("결과")
    for item in items:
        if item.error:
            table.add_row(item.template_id, f"[red]{item.error}[/red]")
        elif item.result.safety.blocked:
            table.add_row(item.template_id, f"[red]{item.result.safety.reason}[/red]")
        else:
            table.add_row(item.template_id, "\n\n".join(v.text for v in item.result.variants) or "-")
    console.print(table)


@app.command()
def presets(
    kind: str = typer.Argument("tones", help="tones | audiences | purposes | relationships | voices"),
) -> None:
    """프리셋 목록을 보여줍니다."""
    catalog = load_catalog(load_config().catalog.presets_path)
    tables = {
        "tones": catalog.tones,
        "audiences": catalog.audiences,
        "purposes": catalog.purposes,
        "relationships": catalog.relationships,
        "voices": catalog.voices,
    }
    if kind not in tables:
        console.print(f"[red]알 수 없는 종류입니다: {kind}[/red]")
        raise typer.Exit(1)

    table = Table(title=kind)
    table.add_column("ID", style="bold")
    table.add_column("이름")
    table.add_column("비고", style="dim")
    for item in tables[kind].values():
        extra = ""
        if kind == "tones":
            extra = f"{item.category.value}, 기본 강도 {item.default_strength}, {item.formality.value}"
        elif kind == "audiences":
            extra = item.group
        elif kind == "relationships":
            extra = item.address or ""
        elif kind == "voices":
            extra = f"{item.style}/{item.age}"
        table.add_row(item.id, item.label, extra)
    console.print(table)


@app.command()
def templates() -> None:
    """일괄 변환 템플릿 목록을 보여줍니다."""
    config = load_config()
    items = generate_templates(load_catalog(config.catalog.presets_path), config.batch.max_templates)
    if not items:
        console.print("[yellow]템플릿이 없습니다.[/yellow]")
        return
    for t in items:
        console.print(f"  [bold]{t.id}[/bold]: {t.name} [dim]({t.tone_id}, {', '.join(t.tags)})[/dim]")


@app.command()
def ssml(
    text: str = typer.Argument(help="음성으로 읽을 문장"),
    audience: str = typer.Option("adult", "--audience", "-a", help="대상 ID"),
    relationship: str = typer.Option(None, "--relationship", "-r", help="관계 ID"),
    bilingual: BilingualMode = typer.Option(BilingualMode.OFF, "--bilingual", "-b"),
) -> None:
    """음성 합성용 SSML을 출력합니다."""
    profile = voice_profile(audience, relationship)
    typer.echo(to_ssml(normalize_for_tts(text, bilingual), profile))


@app.command()
def stats() -> None:
    """이번 달 사용 통계를 보여줍니다."""
    config = load_config()
    store = UsageStore(config.usage.resolved_db_path)
    data = store.get_monthly_stats()
    avg = data["avg_elapsed_seconds"]
    console.print(Panel(
        f"실행 {data['total_runs']}회 · 변형 {data['total_variants']}개 · 차단 {data['blocked_count']}회\n"
        f"입력 {data['total_input_chars']}자 · 평균 {avg if avg is not None else '-'}초 · "
        f"성공률 {data['success_rate']:.1f}%",
        title=f"{data['month']} 사용량",
        border_style="green",
    ))
    tone_counts = store.get_tone_counts()
    if tone_counts:
        table = Table(title="톤별 사용")
        table.add_column("톤")
        table.add_column("횟수", justify="right")
        for tone_id, count in tone_counts.items():
            table.add_row(tone_id, str(count))
        console.print(table)


if __name__ == "__main__":
    app()
