"""Session summary panel.

Shown once the last question is acknowledged (or when the user stops
early): score, counters, timing and best streak.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from termcards.models.theme import Theme
from termcards.study.session import SessionSummary

# Score thresholds (percent) for color and message
GOOD_SCORE = 80
FAIR_SCORE = 60


def score_color(percentage: int, theme: Theme) -> str:
    """Success color at 80%+, warning at 60%+, error below."""
    if percentage >= GOOD_SCORE:
        return theme.colors.success
    if percentage >= FAIR_SCORE:
        return theme.colors.warning
    return theme.colors.error


def get_motivational_message(summary: SessionSummary) -> str:
    if summary.total == 0:
        return "Nothing answered this time."
    if summary.percentage >= 90:
        return "Outstanding! You're mastering this material!"
    if summary.percentage >= GOOD_SCORE:
        return "Great job! Keep up the consistent practice!"
    if summary.percentage >= FAIR_SCORE:
        return "Good effort! Review the challenging cards again."
    return "No worries! Review is the path to mastery."


def format_duration(duration_ms: int) -> str:
    """Format milliseconds as e.g. "5m 23s" or "12s"."""
    minutes, seconds = divmod(duration_ms // 1000, 60)
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def build_summary_panel(summary: SessionSummary, theme: Theme, title: str) -> Panel:
    """Build the summary panel for a finished session."""
    colors = theme.colors
    color = score_color(summary.percentage, theme)

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="bold")
    table.add_column("Value")

    table.add_row("Quiz", Text(title, style=colors.muted))
    table.add_row(
        "Score",
        Text(
            f"{summary.correct}/{summary.total} ({summary.percentage}%)",
            style=f"bold {color}",
        ),
    )
    table.add_row("Correct", Text(f"✓ {summary.correct}", style=colors.success))
    table.add_row("Incorrect", Text(f"✗ {summary.incorrect}", style=colors.error))
    table.add_row("Best streak", str(summary.best_streak))
    table.add_row("Duration", format_duration(summary.duration_ms))
    if summary.total:
        table.add_row("Avg response", f"{summary.avg_response_ms / 1000:.1f}s")

    return Panel(
        table,
        title=f"[bold {colors.secondary}]Session Complete![/]",
        subtitle=get_motivational_message(summary),
        border_style=color,
        padding=(1, 2),
    )


def show_session_summary(
    summary: SessionSummary, theme: Theme, title: str, console: Console
) -> None:
    """Print the summary panel."""
    console.print()
    console.print(build_summary_panel(summary, theme, title))
