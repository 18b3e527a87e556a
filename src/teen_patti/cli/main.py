"""CLI interface for Teen Patti Table."""

import asyncio
import random
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from teen_patti.agents.commentary import DealerCommentator
from teen_patti.api.schemas import SeatView, TableSnapshot
from teen_patti.config import settings
from teen_patti.engine.game_state import ActionType, GameStage, TableState
from teen_patti.engine.hand_manager import HandManager
from teen_patti.session.table_session import TableSession

app = typer.Typer(
    name="teen-patti",
    help="Teen Patti Table - three-seat Teen Patti against two bots",
    add_completion=False,
)
console = Console()

RULES_TEXT = """[bold]Hand rankings[/bold] (highest first)
  1. Trail - three cards of the same rank
  2. Pure Sequence - three consecutive cards of the same suit
  3. Sequence - three consecutive cards (A-2-3 counts)
  4. Color - three cards of the same suit
  5. Pair - two cards of the same rank
  6. High Card - none of the above

[bold]Betting[/bold]
  Every seat pays the boot before the deal.
  Blind: bet without looking, costs 1x boot.
  See: look at your cards (free). Afterwards each bet is a chaal at 2x boot.
  Pack: fold and leave the hand.
  Show: compare all remaining hands now; the best hand takes the pot.

This is a social game using virtual coins. Real money gambling is not supported."""

ACTION_CHOICES = ["see", "bet", "pack", "show", "quit"]


def render_table(snapshot: TableSnapshot) -> None:
    """Print the table: seats, pot and the recent messages."""
    table = Table(title=f"Hand {snapshot.hand_number} - {snapshot.stage.value}")
    table.add_column("Seat", style="cyan")
    table.add_column("Coins", justify="right")
    table.add_column("Bet", justify="right")
    table.add_column("Status")
    table.add_column("Cards")

    for index, seat in enumerate(snapshot.seats):
        name = seat.name
        if index == snapshot.turn_index and snapshot.stage == GameStage.BETTING:
            name = f"> {name}"
        if snapshot.winner == seat.id:
            name = f"[bold green]{name} (winner)[/bold green]"
        table.add_row(
            name,
            f"{seat.coins:,}",
            f"{seat.current_bet:,}",
            _seat_status(seat),
            _seat_cards(seat),
        )

    console.print(table)
    console.print(f"  Pot: [bold yellow]{snapshot.pot:,}[/bold yellow]  Boot: {snapshot.boot_amount:,}")

    if snapshot.messages:
        lines = [
            f"[magenta]{m.text}[/magenta]" if m.role == "ai" else m.text
            for m in snapshot.messages[-5:]
        ]
        console.print(Panel("\n".join(lines), title="Table Talk", expand=False))


def _seat_status(seat: SeatView) -> str:
    if seat.is_packed:
        return "[red]Packed[/red]"
    if seat.card_count == 0:
        return "-"
    return "Seen" if seat.is_seen else "Blind"


def _seat_cards(seat: SeatView) -> str:
    if seat.hand:
        cards = " ".join(
            f"[red]{c.label}[/red]" if c.suit in ("hearts", "diamonds") else c.label
            for c in seat.hand
        )
        return f"{cards}  ({seat.hand_rank})"
    return "# " * seat.card_count


@app.command()
def play(
    boot: int = typer.Option(
        settings.boot_amount,
        "--boot", "-b",
        help="Boot amount per hand",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed for shuffling and bot decisions",
    ),
    no_commentary: bool = typer.Option(
        False,
        "--no-commentary",
        help="Don't call the LLM dealer",
    ),
):
    """Sit down at the table and play against Raj and Priya."""
    commentator = None
    if settings.commentary_enabled and not no_commentary:
        commentator = DealerCommentator()

    manager = HandManager(
        state=TableState.create_default(boot_amount=boot),
        rng=random.Random(seed),
        commentator=commentator,
    )

    async def run():
        while True:
            if not manager.start_new_hand():
                console.print("[bold red]Not enough coins at the table to deal another hand.[/bold red]")
                break

            while manager.state.stage == GameStage.BETTING:
                render_table(manager.snapshot())
                human = manager.state.human
                if not human.is_active:
                    manager.play_bot_turns()
                    continue

                bet_label = "chaal" if human.is_seen else "blind"
                cost = manager.state.bet_amount_for(human)
                console.print(f"  bet = {bet_label} ({cost:,})")
                # Prompt off the event loop so commentary can land while we wait
                choice = await asyncio.to_thread(
                    typer.prompt, "Your move [see/bet/pack/show/quit]", default="bet",
                )
                choice = choice.strip().lower()

                if choice not in ACTION_CHOICES:
                    console.print(f"[yellow]Unknown move: {choice}[/yellow]")
                elif choice == "quit":
                    await manager.drain_commentary()
                    return
                elif choice == "see":
                    manager.see()
                else:
                    action = {
                        "bet": ActionType.CHAAL if human.is_seen else ActionType.BLIND,
                        "pack": ActionType.PACK,
                        "show": ActionType.SHOW,
                    }[choice]
                    result = await manager.handle_action(action)
                    if not result.success:
                        console.print(f"[red]{result.error}[/red]")

            await manager.drain_commentary()
            render_table(manager.snapshot())

            if not await asyncio.to_thread(typer.confirm, "Deal the next hand?", default=True):
                break

    asyncio.run(run())

    human = manager.state.human
    console.print(f"\nYou leave the table with [bold]{human.coins:,}[/bold] coins.")


@app.command()
def simulate(
    hands: int = typer.Option(
        100,
        "--hands", "-n",
        help="Number of hands to play",
    ),
    boot: int = typer.Option(
        settings.boot_amount,
        "--boot", "-b",
        help="Boot amount per hand",
    ),
    show_after: int = typer.Option(
        3,
        "--show-after",
        help="Human autopilot calls show after this many of its turns",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed for shuffling and all decisions",
    ),
    progress: bool = typer.Option(
        False,
        "--progress", "-p",
        help="Print a line after every hand",
    ),
):
    """Auto-play a session with the human seat on autopilot."""
    console.print("\n[bold]Simulating session[/bold]")
    console.print(f"  {hands} hands, boot {boot:,}")

    def on_hand(hand_num, result):
        rank = f" with {result.winning_rank}" if result.winning_rank else ""
        console.print(f"  Hand {hand_num}: {result.winner_name} wins {result.pot_size:,}{rank}")

    session = TableSession(
        num_hands=hands,
        seed=seed,
        state=TableState.create_default(boot_amount=boot),
        show_after_rounds=show_after,
        on_hand_complete=on_hand if progress else None,
        console=console,
    )
    result = asyncio.run(session.run())
    session.print_result(result)


@app.command()
def rules():
    """Show the rules of Teen Patti."""
    console.print(Panel(RULES_TEXT, title="How to play", expand=False))


@app.command()
def config():
    """Show current configuration."""
    console.print("\n[bold]Current Configuration[/bold]")

    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Boot Amount", f"{settings.boot_amount:,}")
    table.add_row("Starting Coins (You)", f"{settings.initial_coins:,}")
    table.add_row("Starting Coins (Bots)", f"{settings.bot_starting_coins:,}")
    table.add_row("Bot Turn Delay", f"{settings.bot_turn_delay}s")
    table.add_row("Commentary", "Enabled" if settings.commentary_enabled else "Disabled")
    table.add_row("Commentary Model", settings.commentary_model)
    table.add_row("LLM Temperature", str(settings.llm_temperature))
    table.add_row("LLM Timeout", f"{settings.llm_timeout}s")
    table.add_row("LLM Retries", str(settings.llm_retries))

    console.print(table)

    api_keys = [
        ("OpenAI", bool(settings.openai_api_key)),
        ("Anthropic", bool(settings.anthropic_api_key)),
        ("Google", bool(settings.google_api_key)),
    ]

    console.print("\n[bold]API Keys[/bold]")
    for name, configured in api_keys:
        status = "[green]Configured[/green]" if configured else "[red]Not Set[/red]"
        console.print(f"  {name}: {status}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
