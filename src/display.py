"""Rich display helpers for dice results and roll history."""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from src.dice.history import DiceRollHistory, format_roll_summary
from src.dice.legacy import LegacyRollResult, is_disaster, is_triumph
from src.dice.parser import format_modifier
from src.dice.types import (
    CustomResult,
    DamageResult,
    HistoryEntry,
    PoolResult,
    RollKind,
)


# Shared console instance
console = Console()


def format_timestamp(entry: HistoryEntry) -> str:
    """Format a roll time as HH:MM:SS."""
    return entry.timestamp.strftime("%H:%M:%S")


def format_success_label(net_successes: int) -> str:
    """Describe net successes the way attack and skill rolls report them.

    Examples:
        >>> format_success_label(0)
        '0✶ — Falha'
        >>> format_success_label(3)
        '3✶ — Sucesso Excepcional'
    """
    if net_successes <= 0:
        return "0✶ — Falha"
    if net_successes == 1:
        return "1✶ — Sucesso"
    if net_successes == 2:
        return "2✶ — Sucesso Forte"
    return f"{net_successes}✶ — Sucesso Excepcional"


def _render_pool(result: PoolResult) -> Text:
    text = Text()
    for index, die in enumerate(result.dice):
        if index:
            text.append(" ")
        if die.is_success:
            style = "bold green"
        elif die.is_cancellation:
            style = "bold red"
        else:
            style = "dim"
        text.append(f"[{die.value}]", style=style)

    if result.is_penalty_roll:
        discarded = list(result.rolls)
        discarded.remove(result.dice[0].value)
        text.append(f"  (descartado: {discarded[0]})", style="dim")

    text.append("\n")
    text.append(
        f"{result.successes} sucesso(s), {result.cancellations} cancelamento(s)\n"
    )
    text.append(format_success_label(result.net_successes), style="bold cyan")

    badges = []
    if result.is_penalty_roll:
        badges.append(("Penalidade", "yellow"))
    if result.dice_modifier:
        badges.append((f"{format_modifier(result.dice_modifier)}d", "magenta"))
    for label, style in badges:
        text.append(f"  {label}", style=style)
    return text


def _render_damage(result: DamageResult) -> Text:
    text = Text()
    text.append(" + ".join(str(value) for value in result.rolls))
    if result.modifier:
        text.append(f" ({format_modifier(result.modifier)})")
    text.append(" = ")
    text.append(str(result.final_result), style="bold cyan")
    if result.is_critical:
        text.append("  CRÍTICO", style="bold yellow")
    return text


def _render_custom(result: CustomResult) -> Text:
    text = Text()
    if result.summed:
        text.append(" + ".join(str(value) for value in result.rolls))
        if result.modifier:
            text.append(f" ({format_modifier(result.modifier)})")
        text.append(" = ")
        text.append(str(result.total), style="bold cyan")
    else:
        text.append(", ".join(str(value) for value in result.rolls), style="bold cyan")
    return text


_RENDERERS = {
    RollKind.POOL: _render_pool,
    RollKind.DAMAGE: _render_damage,
    RollKind.CUSTOM: _render_custom,
}


def render_roll_body(result: HistoryEntry) -> Text:
    """Render the body of a roll result, dispatching on its kind.

    Raises:
        ValueError: If the result has no known kind.
    """
    renderer = _RENDERERS.get(getattr(result, "kind", None))
    if renderer is None:
        raise ValueError(f"Unknown roll result type: {type(result).__name__}")
    return renderer(result)


def render_roll_result(result: HistoryEntry) -> Panel:
    """Build a panel for a pool, damage or custom result."""
    title = f"[bold]{result.formula}[/bold]"
    if result.context:
        title += f" - {result.context}"

    border = "cyan"
    if getattr(result, "is_critical", False):
        border = "yellow"
    elif getattr(result, "is_penalty_roll", False):
        border = "red"

    return Panel(
        render_roll_body(result),
        title=title,
        subtitle=format_timestamp(result),
        border_style=border,
        padding=(0, 1),
    )


def render_legacy_result(
    result: LegacyRollResult,
    difficulty: int | None = None,
) -> Panel:
    """Build a panel for a legacy keep-one roll with triumph/disaster tags."""
    text = Text()
    for index, value in enumerate(result.rolls):
        if index:
            text.append(" ")
        style = "bold" if value == result.base_result else "dim"
        text.append(f"[{value}]", style=style)
    text.append(f"  → {result.base_result}")
    if result.modifier:
        text.append(f" ({format_modifier(result.modifier)})")
    text.append(" = ")
    text.append(str(result.final_result), style="bold cyan")

    border = "cyan"
    if is_triumph(result, difficulty):
        text.append("  TRIUNFO!", style="bold yellow")
        border = "yellow"
    elif is_disaster(result):
        text.append("  DESASTRE!", style="bold red")
        border = "red"

    title = f"[bold]{result.formula}[/bold]"
    if result.context:
        title += f" - {result.context}"
    return Panel(text, title=title, border_style=border, padding=(0, 1))


def display_roll_result(result: HistoryEntry) -> None:
    """Print a roll result panel."""
    console.print(render_roll_result(result))


def build_history_table(
    history: DiceRollHistory,
    max_entries: int = 50,
) -> Table:
    """Build a table of the most recent rolls, newest first."""
    entries = history.get_last(max_entries)
    table = Table(title=f"Histórico ({len(entries)})", box=box.ROUNDED)
    table.add_column("Hora", style="dim")
    table.add_column("Rolagem")
    table.add_column("Resultado", style="cyan")

    for entry in entries:
        table.add_row(
            format_timestamp(entry),
            format_roll_summary(entry),
            render_roll_body(entry),
        )
    return table


def display_roll_history(
    history: DiceRollHistory,
    max_entries: int = 50,
) -> None:
    """Print the roll history, or a hint when it is empty."""
    if history.size() == 0:
        console.print(
            "[dim]Nenhuma rolagem ainda. Role os dados para começar![/dim]"
        )
        return
    console.print(build_history_table(history, max_entries))
