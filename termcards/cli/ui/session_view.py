"""Rendering of study session snapshots.

The view only reads SessionSnapshot values and a Theme; it never
touches the engine. render_snapshot() returns a rich renderable so tests
can print it to a recording console.
"""

from __future__ import annotations

from typing import List, Optional

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from termcards.models.theme import Theme
from termcards.study.generator import MultipleChoiceQuestion
from termcards.study.session import Phase, SessionSnapshot

CORRECT_MARK = "✓"
WRONG_MARK = "✗"

MC_INSTRUCTIONS = "Enter a number or letter, or up/down then enter"
TYPED_INSTRUCTIONS = "Type your answer and press Enter"
CONTINUE_INSTRUCTIONS = "Press Enter to continue..."


def render_header(snapshot: SessionSnapshot, theme: Theme, title: str) -> Text:
    """Title, progress and running counters on one line."""
    colors = theme.colors
    header = Text()
    header.append(title, style="bold")
    header.append("   ")
    header.append(f"{snapshot.index + 1}/{snapshot.total}", style="dim")
    header.append("   ")
    header.append(f"{CORRECT_MARK} {snapshot.correct}", style=colors.success)
    header.append("  ")
    header.append(f"{WRONG_MARK} {snapshot.incorrect}", style=colors.error)
    if snapshot.current_streak > 1:
        header.append("   ")
        header.append(f"streak {snapshot.current_streak}", style=colors.warning)
    return header


def _render_options(
    snapshot: SessionSnapshot, question: MultipleChoiceQuestion, theme: Theme
) -> Text:
    colors = theme.colors
    answered = snapshot.phase == Phase.SHOWING_RESULT
    lines = Text()

    for index, option in enumerate(question.options):
        number = index + 1
        prefix = f"  {number}. "
        suffix = ""
        style: Optional[str] = None

        if answered:
            if option.is_correct:
                suffix = f" {CORRECT_MARK}"
                style = f"bold {colors.success}"
            elif index == snapshot.selected_option:
                suffix = f" {WRONG_MARK}"
                style = colors.error
            else:
                style = "dim"
        elif index == snapshot.selected_option:
            prefix = f" ▸{number}. "
            style = f"bold {colors.primary}"

        lines.append(f"{prefix}{option.text}{suffix}\n", style=style or "")

    return lines


def _render_typed(snapshot: SessionSnapshot, theme: Theme) -> Text:
    colors = theme.colors
    text = Text()

    if snapshot.phase != Phase.SHOWING_RESULT:
        text.append(f"> {snapshot.typed_answer}▌", style=f"bold {colors.primary}")
        return text

    verdict_color = colors.success if snapshot.last_correct else colors.error
    text.append(f"Your answer: {snapshot.typed_answer}\n", style=f"bold {verdict_color}")
    if snapshot.last_correct:
        match = snapshot.last_match
        if match is not None and not match.is_exact:
            text.append(f"{CORRECT_MARK} Close enough! ", style=colors.success)
            text.append(f"({snapshot.correct_answer})", style=colors.muted)
        else:
            text.append(f"{CORRECT_MARK} Correct!", style=colors.success)
    else:
        text.append(f"{WRONG_MARK} Incorrect\n", style=colors.error)
        text.append(f"Correct answer: {snapshot.correct_answer}", style=colors.success)
    return text


def _render_explanation(snapshot: SessionSnapshot, theme: Theme) -> Optional[Text]:
    """Card explanation and example, shown on the result screen."""
    question = snapshot.question
    if snapshot.phase != Phase.SHOWING_RESULT or question is None:
        return None

    back = question.card.back
    if not back.explanation and not back.example:
        return None

    text = Text()
    if back.explanation:
        text.append(back.explanation, style=theme.colors.secondary)
    if back.example:
        if back.explanation:
            text.append("\n")
        text.append(f"e.g. {back.example}", style=theme.colors.muted)
    return text


def render_snapshot(snapshot: SessionSnapshot, theme: Theme, title: str) -> RenderableType:
    """Build the renderable for the current question or result.

    Args:
        snapshot: Engine state to draw
        theme: Colors to use
        title: Quiz title for the header

    Returns:
        A rich Panel (an empty Text for a completed session)
    """
    question = snapshot.question
    if snapshot.phase == Phase.COMPLETE or question is None:
        return Text("")

    parts: List[RenderableType] = [Text(question.prompt, style=theme.colors.text), Text("")]

    if isinstance(question, MultipleChoiceQuestion):
        parts.append(_render_options(snapshot, question, theme))
        instructions = MC_INSTRUCTIONS
    else:
        parts.append(_render_typed(snapshot, theme))
        instructions = TYPED_INSTRUCTIONS

    explanation = _render_explanation(snapshot, theme)
    if explanation is not None:
        parts.extend([Text(""), explanation])

    if snapshot.phase == Phase.SHOWING_RESULT:
        instructions = CONTINUE_INSTRUCTIONS
    parts.extend([Text(""), Text(instructions, style="dim")])

    return Panel(
        Group(*parts),
        title=render_header(snapshot, theme, title),
        title_align="left",
        border_style=theme.colors.primary,
        padding=(1, 2),
    )


class SessionView:
    """Draws snapshots to a console.

    Attributes:
        console: Output console
        theme: Colors used for every frame
        title: Quiz title shown in the header
    """

    def __init__(self, console: Console, theme: Theme, title: str) -> None:
        self.console = console
        self.theme = theme
        self.title = title

    def show(self, snapshot: SessionSnapshot) -> None:
        """Print one frame for the snapshot."""
        self.console.print(render_snapshot(snapshot, self.theme, self.title))
