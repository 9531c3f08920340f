"""
Result view: Rich components that render an ExplainResult.

Thin rendering only; every string shown comes from the engine's output
record. The "most influential signals" line is parsed from the decision
trace, exactly as any other consumer of the trace would do it.
"""

from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from lesson_adapt.adaptive import (
    ExplainInput,
    ExplainResult,
    LessonStyle,
    ScoringPolicy,
    extract_top_signals,
)
from lesson_adapt.adaptive.calibration import effective_delta
from lesson_adapt.adaptive.explainer import format_number
from lesson_adapt.adaptive.probe import DeltaEstimate

# =============================================================================
# Theme
# =============================================================================

THEME = {
    "primary": "cyan",
    "secondary": "magenta",
    "success": "green",
    "warning": "yellow",
    "dim": "grey50",
}

STYLE_COLORS = {
    LessonStyle.VISUAL: "bright_blue",
    LessonStyle.TEXT: "white",
    LessonStyle.QUIZ: "green",
}


def style_lesson(style: LessonStyle) -> str:
    """Get styled lesson style string."""
    color = STYLE_COLORS.get(style, "white")
    return f"[{color}]{style.value}[/{color}]"


# =============================================================================
# Panels
# =============================================================================


def render_signals_panel(
    explain_input: ExplainInput,
    result: ExplainResult,
    estimate: Optional[DeltaEstimate] = None,
) -> Panel:
    """Topic, starting style, scores and the signal interpretations."""
    lines = [
        f"[bold]Topic:[/bold] {explain_input.topic or 'the topic'}",
        f"[dim]Starting style signal: [bold]{explain_input.starting_style.value}[/bold] "
        f"(the engine may override based on inputs)[/dim]",
    ]
    if estimate is not None:
        lines.append(f"[bold]Pre-Lesson Score:[/bold] {format_number(estimate.pre_score)}")
        lines.append(f"[bold]Post-Lesson Score:[/bold] {format_number(estimate.post_score)}")
    lines.append(
        f"[{THEME['success']}][bold]Learning Delta:[/bold] "
        f"+{format_number(effective_delta(explain_input.delta))}[/{THEME['success']}]"
    )
    lines.append(
        f"[dim]Signal interpretations: confidence = [bold]{result.calibration.confidence_band.value}[/bold], "
        f"delta = [bold]{result.calibration.delta_band.value}[/bold], "
        f"prior knowledge = [bold]{result.signals.knowledge_label.value}[/bold][/dim]"
    )
    return Panel(
        "\n".join(lines),
        title="[bold]Learning Analysis[/bold]",
        title_align="left",
        border_style=THEME["primary"],
        padding=(1, 2),
    )


def render_decision_panel(result: ExplainResult) -> Panel:
    content = (
        f"{result.decision.title}\n\n"
        f"[dim]Next lesson style:[/dim] [bold]{style_lesson(result.next_style)}[/bold]"
    )
    return Panel(
        content,
        title="[bold]Adaptive Decision[/bold]",
        title_align="left",
        border_style=STYLE_COLORS.get(result.next_style, THEME["primary"]),
        padding=(1, 2),
    )


def render_reasons_panel(result: ExplainResult) -> Panel:
    """Reasons, most influential signals and the raw audit trace."""
    reasons = Text()
    for reason in result.reasons:
        reasons.append("• ", style=THEME["secondary"])
        reasons.append(reason + "\n")

    top = extract_top_signals(result.decision.decision_trace)
    influential = Text.assemble(
        ("Most influential signals: ", "bold"),
        ", ".join(top) if top else "—",
    )
    trace = Text(result.decision.decision_trace, style=THEME["dim"])

    return Panel(
        Group(reasons, influential, Text(), trace),
        title="[bold]Explainability Layer (Why this adaptation?)[/bold]",
        title_align="left",
        border_style=THEME["secondary"],
        padding=(1, 2),
    )


def render_tutor_insight_panel(result: ExplainResult) -> Panel:
    return Panel(
        Text(result.tutor_insight),
        title="[bold]Tutor Insight[/bold]",
        title_align="left",
        border_style=THEME["primary"],
        box=box.ROUNDED,
        padding=(1, 2),
    )


def render_scores_table(result: ExplainResult) -> Table:
    table = Table(title="Style Scores", box=box.SIMPLE)
    table.add_column("Style")
    table.add_column("Score", justify="right")
    for style, score in result.scores.items():
        marker = " ←" if style == result.next_style else ""
        table.add_row(style_lesson(style), f"{score:.4f}{marker}")
    return table


def render_policy_table(policy: ScoringPolicy) -> Table:
    """Weights and thresholds of a decision policy."""
    table = Table(title=f"Decision Policy: {policy.version}", box=box.SIMPLE_HEAVY)
    table.add_column("Setting", style=THEME["primary"])
    table.add_column("Value", justify="right")

    weights = policy.weights
    table.add_row("weight: delta", f"{weights.delta:.2f}")
    table.add_row("weight: confidence", f"{weights.confidence:.2f}")
    table.add_row("weight: prior knowledge", f"{weights.prior_knowledge:.2f}")
    table.add_row("weight: starting style", f"{weights.starting_style:.2f}")
    table.add_row("confidence low (≤)", str(policy.low_confidence_max))
    table.add_row("confidence high (≥)", str(policy.high_confidence_min))
    table.add_row("delta small (<)", format_number(policy.small_delta_limit))
    table.add_row("delta moderate (<)", format_number(policy.moderate_delta_limit))
    table.add_row("delta saturation", format_number(policy.delta_saturation))
    return table


def render_result(
    console: Console,
    explain_input: ExplainInput,
    result: ExplainResult,
    estimate: Optional[DeltaEstimate] = None,
    show_scores: bool = False,
) -> None:
    """Print the full result view."""
    console.print(render_signals_panel(explain_input, result, estimate))
    console.print(render_decision_panel(result))
    console.print(render_reasons_panel(result))
    if show_scores:
        console.print(render_scores_table(result))
    console.print(render_tutor_insight_panel(result))
