"""
Deck Factory for UNO Game

Builds the canonical 108-card deck and owns the stack operations on it:
shuffle, draw from the top (end of the list) and rebuilding the draw pile
from the discard pile.
"""

from typing import List, Optional, Tuple
import random

from ..models.card import (
    Card,
    CardColor,
    CardKind,
    PLAYABLE_COLORS,
    NUMBER_VALUES,
    ACTION_VALUES,
    WILD_VALUES,
)
from utils.exceptions.game_exceptions import EmptyDeck, NoCardsAvailable

DECK_SIZE = 108
WILD_COPIES = 4


def generate_deck() -> List[Card]:
    """Build an unshuffled 108-card deck.

    Per color: one "0" and two each of 1-9, Skip, Reverse, +2 (25 cards).
    Plus four "Wild" and four "+4" wild cards.
    """
    deck: List[Card] = []
    for color in PLAYABLE_COLORS:
        deck.append(Card(color, "0", CardKind.NUMBER.value))
        for value in NUMBER_VALUES[1:] + ACTION_VALUES:
            kind = CardKind.ACTION.value if value in ACTION_VALUES else CardKind.NUMBER.value
            deck.append(Card(color, value, kind))
            deck.append(Card(color, value, kind))

    for _ in range(WILD_COPIES):
        for value in WILD_VALUES:
            deck.append(Card(CardColor.WILD.value, value, CardKind.WILD.value))

    return deck


def shuffle(deck: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Shuffle in place (Fisher-Yates via Random.shuffle) and return the same list."""
    (rng or random).shuffle(deck)
    return deck


def draw(deck: List[Card]) -> Card:
    """Remove and return the top card; raises EmptyDeck when there is none."""
    if not deck:
        raise EmptyDeck()
    return deck.pop()


def reshuffle_from_discard(discard_pile: List[Card], rng: Optional[random.Random] = None) -> Tuple[List[Card], List[Card]]:
    """Turn everything under the top discard into a fresh shuffled deck.

    Returns (new_deck, new_discard) where new_discard holds only the former top.
    Wild cards going back into the deck lose their chosen color.
    """
    if not discard_pile:
        return [], []

    top = discard_pile[-1]
    new_deck = list(discard_pile[:-1])
    for card in new_deck:
        if card.is_wild():
            card.color = CardColor.WILD.value
    shuffle(new_deck, rng)
    return new_deck, [top]


class DeckFactory:
    """Per-room deck operations bound to one random source.

    - Pass a seed for reproducible games (tests, replays)
    - Without a seed every room gets an independently seeded generator
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def build_deck(self) -> List[Card]:
        return shuffle(generate_deck(), self._rng)

    def shuffle(self, deck: List[Card]) -> List[Card]:
        return shuffle(deck, self._rng)

    def draw_with_reshuffle(self, room) -> Card:
        """Draw one card for ``room``, rebuilding its deck from the discard pile if needed.

        Raises NoCardsAvailable when the deck is empty and the discard pile has
        nothing under its top card.
        """
        if not room.deck:
            if len(room.discard_pile) <= 1:
                raise NoCardsAvailable()
            room.deck, room.discard_pile = reshuffle_from_discard(room.discard_pile, self._rng)
        return draw(room.deck)
