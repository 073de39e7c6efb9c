"""Editor and study states, with the transitions between them.

Every transition takes a state and returns a new one; nothing here touches
storage or the terminal.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
import random

from .models import Card
from .parser import parse_cards

DEFAULT_SEPARATOR = "|"


@dataclass
class Editing:
    input: str = ""
    separator: str = DEFAULT_SEPARATOR
    # Cards kept from the last study session.
    cards: list[Card] = field(default_factory=list)


@dataclass
class Studying:
    cards: list[Card]
    index: int = 0
    flipped: bool = False
    editor: Editing = field(default_factory=Editing)


State = Editing | Studying


def edit_input(state: Editing, text: str) -> Editing:
    return replace(state, input=text)


def set_separator(state: Editing, separator: str) -> Editing:
    return replace(state, separator=separator)


def start_study(cards: list[Card], editor: Editing | None = None) -> Studying:
    return Studying(cards=list(cards), index=0, flipped=False, editor=editor or Editing())


def create_cards(state: Editing) -> State:
    """Parse the editor text; stay in the editor if no card came out of it."""
    cards = parse_cards(state.input, state.separator)
    if not cards:
        return state
    return start_study(cards, editor=state)


def back_to_editor(state: Studying) -> Editing:
    return replace(state.editor, cards=list(state.cards))


def next_card(state: Studying) -> Studying:
    if state.index >= len(state.cards) - 1:
        return state
    return replace(state, index=state.index + 1, flipped=False)


def previous_card(state: Studying) -> Studying:
    if state.index <= 0:
        return state
    return replace(state, index=state.index - 1, flipped=False)


def flip(state: Studying) -> Studying:
    return replace(state, flipped=not state.flipped)


def shuffle_cards(cards: list[Card], rng: random.Random | None = None) -> list[Card]:
    """Fisher-Yates shuffle of a copy of ``cards``."""
    rng = rng or random.Random()
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def shuffle(state: Studying, rng: random.Random | None = None) -> Studying:
    return replace(state, cards=shuffle_cards(state.cards, rng), index=0, flipped=False)


def current_card(state: Studying) -> Card | None:
    if not state.cards:
        return None
    return state.cards[state.index]


def visible_side(state: Studying) -> str:
    card = current_card(state)
    if card is None:
        return ""
    # The second field faces up until the card is flipped.
    return card.side1 if state.flipped else card.side2


def progress(state: Studying) -> str:
    if not state.cards:
        return "No cards"
    return f"Card {state.index + 1} of {len(state.cards)}"
