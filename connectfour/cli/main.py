"""
CLI for Connect Four.

Usage:
    connectfour --help
    connectfour play                              # red vs blue
    connectfour play --computer green             # red vs blue vs computer
    connectfour play --p1 red --p2 "" --computer yellow
    connectfour watch --games 3 --seed 7          # computer plays itself
"""

import logging
import time
from typing import Annotated

import typer

from ..core.config import LogLevel, get_settings
from ..core.events import Event, EventType
from ..core.types import GamePhase, GameState
from ..game.board import Board
from ..game.engine import GameEngine, build_players, start_game


app = typer.Typer(
    name="connectfour",
    help="Connect Four for up to two humans and a computer player.",
    add_completion=False,
)

SYMBOLS = ["X", "O", "*"]


@app.callback()
def configure(
    log_level: Annotated[
        LogLevel | None,
        typer.Option("--log-level", case_sensitive=False, help="Logging level (defaults to LOG_LEVEL)"),
    ] = None,
):
    """Configure logging before any command runs."""
    level = log_level or get_settings().log_level
    logging.basicConfig(
        level=level.value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def board_to_ascii(board: Board, engine: GameEngine) -> str:
    """Convert board to ASCII display, column numbers on top."""
    symbols = {player: SYMBOLS[i] for i, player in enumerate(engine.players)}
    lines = ["\n " + "".join(f"{col:^4}" for col in range(board.width))]
    lines.append("+" + "---+" * board.width)

    for row in board.rows:
        cells = [" " if cell is None else symbols[cell] for cell in row]
        lines.append("|" + "|".join(f" {c} " for c in cells) + "|")
        lines.append("+" + "---+" * board.width)

    lines.append("  ".join(
        f"{symbols[p]}={p.color}" + (" (computer)" if p.is_computer else "")
        for p in engine.players
    ))
    return "\n".join(lines)


def print_status(engine: GameEngine, state: GameState) -> None:
    """Print board and whose turn it is (or how the game ended)."""
    typer.echo(board_to_ascii(engine.board, engine))
    typer.echo(f"\nTurn: {state.turn_number}")

    if state.phase == GamePhase.AWAITING_MOVE:
        typer.echo(state.message)
        typer.echo(f"Legal moves: {state.legal_moves}")
    else:
        typer.echo(f"\n{state.message}")


def _show_computer_moves(engine: GameEngine, delay: float):
    """Build a MOVE_MADE handler that shows each computer move after a pause."""

    def handler(event: Event) -> None:
        if not event.data.get("computer"):
            return
        time.sleep(delay)
        typer.echo(f"\nComputer {event.data['player']} played column {event.data['column']}")
        typer.echo(board_to_ascii(engine.board, engine))

    return handler


@app.command()
def play(
    p1: Annotated[str | None, typer.Option("--p1", help="Player 1 color (blank to skip)")] = None,
    p2: Annotated[str | None, typer.Option("--p2", help="Player 2 color (blank to skip)")] = None,
    computer: Annotated[
        str | None, typer.Option("--computer", "-c", help="Computer player color (blank for none)")
    ] = None,
    height: Annotated[int | None, typer.Option("--height", help="Board rows (min 4)")] = None,
    width: Annotated[int | None, typer.Option("--width", help="Board columns (min 4)")] = None,
    seed: Annotated[int | None, typer.Option("--seed", help="Seed for the computer player")] = None,
    delay: Annotated[
        float | None, typer.Option("--delay", help="Seconds to pause before showing a computer move")
    ] = None,
):
    """
    Play Connect Four in the terminal.

    Players move in order: player 1, player 2, computer.

    Examples:
        play                         # two humans
        play --computer green        # two humans and a computer
        play --p2 "" -c yellow       # one human against the computer
    """
    settings = get_settings()
    p1 = settings.players.p1_color if p1 is None else p1
    p2 = settings.players.p2_color if p2 is None else p2
    computer = settings.players.computer_color if computer is None else computer
    delay = settings.ai.move_delay if delay is None else delay

    engine = _start(
        p1,
        p2,
        computer,
        settings.game.height if height is None else height,
        settings.game.width if width is None else width,
        seed if seed is not None else settings.ai.seed,
        delay,
    )
    _play_loop(engine)


def _start(
    p1: str,
    p2: str,
    computer: str,
    height: int,
    width: int,
    seed: int | None,
    delay: float,
) -> GameEngine:
    """Start a game with the computer-move display hooked up before the first move."""
    typer.echo("\n" + "=" * 40)
    typer.echo("  CONNECT FOUR")
    typer.echo("=" * 40)

    try:
        engine = GameEngine(
            build_players(p1, p2, computer, seed=seed),
            height=height,
            width=width,
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    engine.bus.subscribe(EventType.MOVE_MADE, _show_computer_moves(engine, delay))
    engine.new_game()
    return engine


def _play_loop(engine: GameEngine) -> None:
    """Prompt human players for columns until the game ends."""
    state = engine.state
    typer.echo(f"\nEnter column number (0-{engine.width - 1}) to play, 'q' to quit")

    while not engine.is_game_over:
        print_status(engine, state)

        try:
            user_input = typer.prompt(f"\nPlayer {state.current_player} move")
        except (KeyboardInterrupt, typer.Abort):
            typer.echo("\nGame quit.")
            return

        if user_input.strip().lower() == "q":
            typer.echo("Game quit.")
            return

        try:
            column = int(user_input)
        except ValueError:
            typer.echo(f"Enter a number 0-{engine.width - 1}")
            continue

        result = engine.apply_move(column)
        if not result.accepted:
            typer.echo(f"Invalid! ({result.rejection.value}) Legal moves: {state.legal_moves}")
            continue
        state = result.state

    print_status(engine, engine.state)


@app.command()
def watch(
    color: Annotated[str, typer.Option("--color", help="Computer player color")] = "yellow",
    games: Annotated[int, typer.Option("--games", "-n", min=1, help="Number of games to play")] = 1,
    height: Annotated[int | None, typer.Option("--height", help="Board rows (min 4)")] = None,
    width: Annotated[int | None, typer.Option("--width", help="Board columns (min 4)")] = None,
    seed: Annotated[int | None, typer.Option("--seed", help="Seed for the computer player")] = None,
):
    """Watch a single computer player play against itself."""
    settings = get_settings()
    try:
        engine = start_game(
            computer_color=color,
            height=settings.game.height if height is None else height,
            width=settings.game.width if width is None else width,
            seed=seed if seed is not None else settings.ai.seed,
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    for game in range(1, games + 1):
        if game > 1:
            engine.new_game()
        state = engine.state
        typer.echo(f"\n=== Game {game}/{games} ===")
        typer.echo(board_to_ascii(engine.board, engine))
        typer.echo(f"{state.message} ({len(state.move_history)} moves)")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
