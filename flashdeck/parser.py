from __future__ import annotations

from pathlib import Path
import logging

from .models import Card

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    return [line for line in text.split("\n") if line.strip()]


def parse_line(line: str, separator: str) -> Card | None:
    if not separator:
        return None
    fields = [f.strip() for f in line.split(separator)]
    # Anything past the second field is discarded.
    if len(fields) < 2:
        return None
    side1, side2 = fields[0], fields[1]
    if not side1 or not side2:
        return None
    return Card(side1=side1, side2=side2)


def parse_cards(text: str, separator: str) -> list[Card]:
    lines = split_lines(text)
    cards = []
    for line in lines:
        card = parse_line(line, separator)
        if card is not None:
            cards.append(card)

    dropped = len(lines) - len(cards)
    if dropped:
        logger.debug("dropped %d malformed line(s)", dropped)
    return cards


def read_cards_file(path: Path, separator: str) -> list[Card]:
    text = path.read_text(encoding="utf-8", errors="ignore")
    return parse_cards(text, separator)
