from flashdeck.models import Card
from flashdeck.parser import parse_cards, parse_line, read_cards_file


def test_parses_pairs_in_order():
    assert parse_cards("A|B\nC|D", "|") == [
        Card(side1="A", side2="B"),
        Card(side1="C", side2="D"),
    ]


def test_line_without_separator_is_dropped():
    assert parse_cards("OnlyOneField", "|") == []


def test_blank_lines_never_produce_cards():
    text = "\n   \nA|B\n\t\n\nC|D\n"
    assert parse_cards(text, "|") == [Card("A", "B"), Card("C", "D")]


def test_sides_are_trimmed():
    assert parse_cards("  Hello  |  Hola ", "|") == [Card("Hello", "Hola")]


def test_empty_side_drops_line():
    assert parse_cards("A|\n|B\n  |  \nC|D", "|") == [Card("C", "D")]


def test_extra_fields_are_discarded():
    assert parse_cards("A|B|C|D", "|") == [Card("A", "B")]


def test_repeated_separator_leaves_empty_second_field():
    assert parse_cards("A||B", "|") == []


def test_empty_separator_yields_nothing():
    assert parse_cards("A|B\nC|D", "") == []
    assert parse_line("A|B", "") is None


def test_multi_character_separator():
    assert parse_cards("dog :: perro\ncat :: gato", "::") == [
        Card("dog", "perro"),
        Card("cat", "gato"),
    ]


def test_windows_line_endings():
    assert parse_cards("A|B\r\nC|D\r\n", "|") == [Card("A", "B"), Card("C", "D")]


def test_every_card_has_two_non_empty_sides():
    text = "a|b\n|\nx|  \n  |y\nfoo\n\n  q  |  r  |  s\n|||"
    for card in parse_cards(text, "|"):
        assert card.side1.strip() and card.side2.strip()
        assert card.side1 == card.side1.strip()
        assert card.side2 == card.side2.strip()


def test_read_cards_file(tmp_path):
    path = tmp_path / "cards.txt"
    path.write_text("uno\tone\ndos\ttwo\n", encoding="utf-8")
    assert read_cards_file(path, "\t") == [Card("uno", "one"), Card("dos", "two")]
