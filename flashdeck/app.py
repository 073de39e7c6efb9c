from __future__ import annotations

from pathlib import Path
from typing import Callable
import argparse
import logging
import random

from .config import Settings, load_settings
from .logging_config import setup_logging
from .models import Card
from .parser import parse_cards, read_cards_file
from .session import (
    Editing,
    Studying,
    back_to_editor,
    create_cards,
    current_card,
    edit_input,
    flip,
    next_card,
    previous_card,
    progress,
    set_separator,
    shuffle,
    start_study,
    visible_side,
)
from .storage import SetStore, open_store

logger = logging.getLogger(__name__)

Reader = Callable[[str], str]
Writer = Callable[[str], None]

STUDY_HELP = "[n]ext  [p]revious  [f]lip  [s]huffle  [e]ditor"


def read_editor_text(read: Reader, write: Writer, separator: str) -> str:
    write(f"Enter your flashcards, one pair per line (e.g. Hello{separator}Hola).")
    write("Finish with an empty line.")
    lines = []
    while True:
        try:
            line = read("")
        except EOFError:
            break
        if not line.strip():
            break
        lines.append(line)
    return "\n".join(lines)


def show_card(state: Studying, write: Writer) -> None:
    write(progress(state))
    write(f"  {visible_side(state)}")


def study_loop(
    state: Studying,
    read: Reader = input,
    write: Writer = print,
    rng: random.Random | None = None,
) -> Editing:
    if current_card(state) is None:
        write("No cards to study.")
        return back_to_editor(state)

    write(STUDY_HELP)
    show_card(state, write)
    while True:
        try:
            cmd = read("> ").strip().lower()
        except EOFError:
            break

        if cmd in {"e", "q"}:
            break
        if cmd == "n":
            state = next_card(state)
        elif cmd == "p":
            state = previous_card(state)
        elif cmd == "f":
            state = flip(state)
        elif cmd == "s":
            state = shuffle(state, rng)
        else:
            write(STUDY_HELP)
            continue
        show_card(state, write)

    return back_to_editor(state)


def _load_text(args: argparse.Namespace, read: Reader, write: Writer) -> str:
    if args.file:
        return Path(args.file).read_text(encoding="utf-8", errors="ignore")
    return read_editor_text(read, write, args.separator)


def cmd_study(args, store: SetStore, read: Reader, write: Writer) -> int:
    editor = set_separator(Editing(), args.separator)
    editor = edit_input(editor, _load_text(args, read, write))
    state = create_cards(editor)
    if isinstance(state, Editing):
        write("No valid cards found. Use one pair per line with the separator between sides.")
        return 1

    if args.save:
        if store.save(args.save, state.cards):
            write(f"Saved {len(state.cards)} card(s) as {args.save!r}.")
        else:
            write("Set name is blank, not saved.")
    study_loop(state, read, write)
    return 0


def cmd_open(args, store: SetStore, read: Reader, write: Writer) -> int:
    state = start_study(store.load(args.name))
    study_loop(state, read, write)
    return 0


def cmd_save(args, store: SetStore, read: Reader, write: Writer) -> int:
    if args.file:
        cards = read_cards_file(Path(args.file), args.separator)
    else:
        cards = parse_cards(read_editor_text(read, write, args.separator), args.separator)
    if not cards:
        write("No valid cards found, nothing saved.")
        return 1
    if not store.save(args.name, cards):
        write("Set name is blank, not saved.")
        return 1
    write(f"Saved {len(cards)} card(s) as {args.name!r}.")
    return 0


def cmd_list(args, store: SetStore, read: Reader, write: Writer) -> int:
    names = store.names()
    if not names:
        write("No saved sets.")
    for name in names:
        write(f"{name} ({len(store.load(name))} cards)")
    return 0


def format_cards(cards: list[Card], separator: str) -> list[str]:
    return [f"{c.side1}{separator}{c.side2}" for c in cards]


def cmd_show(args, store: SetStore, read: Reader, write: Writer) -> int:
    if args.name not in store:
        write(f"No set named {args.name!r}.")
        return 1
    for line in format_cards(store.load(args.name), args.separator):
        write(line)
    return 0


def cmd_delete(args, store: SetStore, read: Reader, write: Writer) -> int:
    if store.delete(args.name):
        write(f"Deleted {args.name!r}.")
    else:
        write(f"No set named {args.name!r}.")
    return 0


COMMANDS = {
    "study": cmd_study,
    "open": cmd_open,
    "save": cmd_save,
    "list": cmd_list,
    "show": cmd_show,
    "delete": cmd_delete,
}


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flashdeck", description="Flashcard study tool")
    sub = parser.add_subparsers(dest="cmd", required=True)

    def add_input_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--file", "-f", help="Read card text from this file instead of the prompt")
        p.add_argument(
            "--separator",
            "-s",
            default=settings.default_separator,
            help="Text between the two sides of a card",
        )

    st = sub.add_parser("study", help="Create cards from text and study them")
    add_input_args(st)
    st.add_argument("--save", metavar="NAME", help="Also save the cards under this name")

    op = sub.add_parser("open", help="Study a saved set")
    op.add_argument("name")

    sv = sub.add_parser("save", help="Create cards from text and save them as a set")
    sv.add_argument("name")
    add_input_args(sv)

    sub.add_parser("list", help="List saved sets")

    sh = sub.add_parser("show", help="Print the cards of a saved set")
    sh.add_argument("name")
    sh.add_argument("--separator", "-s", default=settings.default_separator)

    dl = sub.add_parser("delete", help="Delete a saved set")
    dl.add_argument("name")
    return parser


def main(
    argv: list[str] | None = None,
    read: Reader = input,
    write: Writer = print,
    settings: Settings | None = None,
) -> int:
    settings = settings or load_settings()
    setup_logging(settings.log_level)
    args = build_parser(settings).parse_args(argv)

    store = open_store(settings.storage_file, key=settings.storage_key)
    logger.debug("loaded %d set(s) from %s", len(store), settings.storage_file)

    try:
        return COMMANDS[args.cmd](args, store, read, write)
    except FileNotFoundError as exc:
        write(f"Cannot read {exc.filename}.")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
