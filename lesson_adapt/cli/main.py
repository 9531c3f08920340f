"""
Typer CLI for lesson-adapt.

Commands:
    lesson-adapt explain        - Decide the next lesson style and explain why
    lesson-adapt explain --ask  - Run the pre-learning probe interactively first
    lesson-adapt policy         - Show the active decision policy
    lesson-adapt serve          - Run the REST API

Usage:
    lesson-adapt explain --topic "Algebra basics" --knowledge Basic --confidence 3 --delta 50 --start visual
    lesson-adapt explain -t Fractions -k "never done this" -c 2 --json
    python -m lesson_adapt.cli.main policy
"""

from __future__ import annotations

import json
import math
import sys
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.prompt import Prompt

from config import get_settings
from lesson_adapt.adaptive import (
    DEFAULT_POLICY,
    ExplainabilityEngine,
    ExplainInput,
    LessonStyle,
    estimate_learning_delta,
    parse_probe_answers,
)
from lesson_adapt.adaptive.probe import probe_questions
from lesson_adapt.delivery.result_view import render_policy_table, render_result

app = typer.Typer(
    name="lesson-adapt",
    help="Deterministic, explainable lesson-style adaptation",
    no_args_is_help=True,
)
console = Console()


def _ask_probe(topic: str) -> tuple[str, str]:
    """Ask the two pre-learning probe questions."""
    console.print("\n[bold cyan]Pre-Learning Signals[/bold cyan]")
    console.print("[dim]Lower confidence adds guidance; higher shifts toward practice.[/dim]\n")
    knowledge_question, confidence_question = probe_questions(topic or "this topic")
    knowledge = Prompt.ask(knowledge_question, default="")
    confidence = Prompt.ask(confidence_question, default="")
    return knowledge, confidence


@app.command()
def explain(
    topic: str = typer.Option("", "--topic", "-t", help="Lesson topic"),
    knowledge: Optional[str] = typer.Option(None, "--knowledge", "-k", help="What the learner already knows"),
    confidence: Optional[float] = typer.Option(None, "--confidence", "-c", help="Confidence 1-5 (clamped)"),
    delta: Optional[float] = typer.Option(None, "--delta", "-d", help="Learning delta; estimated when omitted"),
    start: LessonStyle = typer.Option(LessonStyle.TEXT, "--start", "-s", help="Starting lesson style"),
    ask: bool = typer.Option(False, "--ask", help="Ask the probe questions interactively"),
    as_json: bool = typer.Option(False, "--json", help="Print the output record as JSON"),
    show_scores: bool = typer.Option(False, "--scores", help="Show per-style scores"),
) -> None:
    """
    Decide the next lesson style from learner signals.

    Renders the decision, signal interpretations, reasons, most influential
    signals, the audit trace and the tutor insight.
    """
    settings = get_settings()

    if ask:
        knowledge_text, confidence_text = _ask_probe(topic)
        answers = parse_probe_answers(
            knowledge_text,
            confidence_text,
            default_knowledge=settings.default_prior_knowledge,
            default_confidence=settings.default_confidence,
        )
        knowledge, confidence = answers.prior_knowledge, answers.confidence

    if confidence is None or math.isnan(confidence):
        confidence = settings.default_confidence
    if float(confidence).is_integer():
        confidence = int(confidence)

    estimate = None
    if delta is None:
        estimate = estimate_learning_delta(
            knowledge or settings.default_prior_knowledge,
            confidence,
            post_score=settings.post_lesson_score,
        )
        delta = estimate.delta
        logger.debug(f"Estimated delta {delta} (pre={estimate.pre_score}, post={estimate.post_score})")

    explain_input = ExplainInput(
        topic=topic,
        prior_knowledge=knowledge or "",
        confidence=confidence,
        delta=delta,
        starting_style=start,
    )
    result = ExplainabilityEngine(DEFAULT_POLICY).explain(explain_input)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    render_result(console, explain_input, result, estimate, show_scores=show_scores)


@app.command()
def policy() -> None:
    """Show the weights and thresholds of the active decision policy."""
    console.print(render_policy_table(DEFAULT_POLICY))


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind host (default from settings)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port (default from settings)"),
) -> None:
    """Run the REST API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "lesson_adapt.api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_level=settings.log_level.lower(),
    )


# =============================================================================
# Entry Point
# =============================================================================

def main() -> None:
    """CLI entry point."""
    settings = get_settings()
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if settings.log_level == "DEBUG" else "WARNING",
        format="<level>{message}</level>",
    )

    app()


if __name__ == "__main__":
    main()
