"""Card model and deck construction/shuffling."""

import random
from dataclasses import dataclass, field
from enum import Enum


class Suit(str, Enum):
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"


SUITS = [Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES]
RANKS = ["2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A"]
RANK_VALUES = {rank: value for value, rank in enumerate(RANKS, start=2)}

SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

DECK_SIZE = 52
CARDS_PER_HAND = 3


@dataclass(frozen=True)
class Card:
    """A single playing card. `value` is derived from rank (2=2 ... A=14)."""
    suit: Suit
    rank: str
    value: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        if self.rank not in RANK_VALUES:
            raise ValueError(f"Invalid rank: {self.rank}")
        object.__setattr__(self, "suit", Suit(self.suit))
        object.__setattr__(self, "value", RANK_VALUES[self.rank])

    @property
    def label(self) -> str:
        """Short display label, e.g. "10♥"."""
        return f"{self.rank}{SUIT_SYMBOLS[self.suit]}"

    @property
    def is_red(self) -> bool:
        return self.suit in (Suit.HEARTS, Suit.DIAMONDS)

    def __str__(self) -> str:
        return self.label


def create_deck() -> list[Card]:
    """Build the 52-card deck in canonical order (suit-major, rank-minor)."""
    return [Card(suit, rank) for suit in SUITS for rank in RANKS]


def shuffle_deck(deck: list[Card], rng: random.Random | None = None) -> list[Card]:
    """
    Return a uniformly shuffled copy of `deck`.

    Args:
        deck: Cards to shuffle (left untouched)
        rng: Random source; a fresh unseeded one is used when omitted

    Returns:
        New list holding a permutation of the input
    """
    rng = rng or random.Random()
    shuffled = list(deck)
    # Fisher-Yates, back to front
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def parse_card(text: str) -> Card:
    """
    Parse a compact card string such as "As", "10h" or "Qd".

    The last character is the suit initial (h, d, c, s); the rest is the rank.
    """
    suit_map = {"h": Suit.HEARTS, "d": Suit.DIAMONDS, "c": Suit.CLUBS, "s": Suit.SPADES}
    text = text.strip()
    if len(text) < 2:
        raise ValueError(f"Invalid card string: {text!r}")

    rank = text[:-1].upper()
    if rank == "T":
        rank = "10"
    suit = suit_map.get(text[-1].lower())
    if suit is None:
        raise ValueError(f"Invalid suit in card string: {text!r}")
    return Card(suit, rank)


def parse_cards(text: str) -> list[Card]:
    """Parse a whitespace-separated list of cards, e.g. "As Kd 2c"."""
    return [parse_card(part) for part in text.split()]


def format_cards(cards: list[Card]) -> str:
    """Format cards for display, e.g. "A♠ K♥ 2♣"."""
    return " ".join(card.label for card in cards)
