"""Interactive console for the blackjack cracker.

Run:
    bj-cracker
    # or, from the repository root:
    python -m src.console.repl
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import Callable

from src.analysis.report import print_calculation_result, print_hands, print_settings
from src.console.commands import Quit, Session, apply_command, parse_command
from src.engine.errors import CrackerError

HELP_LINES: list[str] = [
    "COMMANDS",
    "> D: 1 2 3 4... => Set dealer hand",
    "> P: 1 2 3 4... => Set player hand",
    "> Calc          => Calculate hit / stand chances",
    "> Decision = N  => Set decision factor; 1: Most win, 2: Least loss",
    "> Soft17   = N  => Set soft 17; Y: Soft 17, N: Hard 17",
    "> Clear         => Clear the hand",
    "> Quit          => Leave",
]


def app_version() -> str:
    try:
        return version("blackjack-cracker")
    except PackageNotFoundError:
        return "???"


def print_screen(session: Session) -> None:
    """Print the banner, the hands, and the last result of the session."""
    print(f"BLACKJACK CRACKER v{app_version()}")
    print()
    for line in HELP_LINES:
        print(line)
    print()
    print()

    print_hands(session.dealer, session.player)

    if session.dealer.is_empty() or session.player.is_empty():
        print("Set hand to calculate things")
    else:
        if session.result is not None:
            print_calculation_result(session.result, session.elapsed)
        print()
        print_settings(session.config)
    print()


def read_and_apply(session: Session, read: Callable[[str], str]) -> bool:
    """Prompt until one command is applied.

    Returns:
        False when the session should end (quit command or end of input).
    """
    while True:
        try:
            line = read("> ")
        except EOFError:
            return False

        try:
            command = parse_command(line)
        except CrackerError as exc:
            print(exc)
            continue
        if isinstance(command, Quit):
            return False

        # Only Calculate can fail here.
        try:
            apply_command(session, command)
        except CrackerError as exc:
            print(f"Calculation failed: {exc}")
            continue

        print()
        print()
        print()
        return True


def run(session: Session | None = None, read: Callable[[str], str] = input) -> Session:
    """Run the interactive loop until quit or end of input."""
    if session is None:
        session = Session()
    while True:
        print_screen(session)
        if not read_and_apply(session, read):
            return session


def main() -> None:
    try:
        run()
    except KeyboardInterrupt:
        print()


if __name__ == "__main__":
    main()
