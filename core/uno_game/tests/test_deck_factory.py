import random
from collections import Counter

import pytest

from ..models.card import Card, CardColor, PLAYABLE_COLORS
from ..models.room import Room
from ..utils.deck_factory import (
    DECK_SIZE,
    DeckFactory,
    draw,
    generate_deck,
    reshuffle_from_discard,
    shuffle,
)
from utils.exceptions.game_exceptions import EmptyDeck, NoCardsAvailable


class TestGenerateDeck:
    """Composition of the canonical deck."""

    def setup_method(self):
        self.deck = generate_deck()

    def test_has_108_cards(self):
        assert len(self.deck) == DECK_SIZE == 108

    def test_25_cards_per_color(self):
        colors = Counter(card.color for card in self.deck)
        for color in PLAYABLE_COLORS:
            assert colors[color] == 25
        assert colors[CardColor.WILD.value] == 8

    def test_one_zero_and_two_of_everything_else_per_color(self):
        counts = Counter((card.color, card.value) for card in self.deck)
        for color in PLAYABLE_COLORS:
            assert counts[(color, "0")] == 1
            for value in [str(n) for n in range(1, 10)] + ["Skip", "Reverse", "+2"]:
                assert counts[(color, value)] == 2

    def test_wild_cards(self):
        wilds = [card for card in self.deck if card.is_wild()]
        assert Counter(card.value for card in wilds) == {"Wild": 4, "+4": 4}
        assert all(card.kind == "wild" for card in wilds)

    def test_kinds(self):
        assert all(card.kind == "action" for card in self.deck if card.value in ("Skip", "Reverse", "+2"))
        assert all(card.kind == "number" for card in self.deck if card.value.isdigit())


class TestShuffleAndDraw:

    def test_shuffle_preserves_multiset(self):
        deck = generate_deck()
        before = Counter(deck)
        rng = random.Random(7)
        for _ in range(5):
            shuffle(deck, rng)
        assert Counter(deck) == before
        assert len(deck) == 108

    def test_shuffle_returns_same_list(self):
        deck = generate_deck()
        assert shuffle(deck, random.Random(1)) is deck

    def test_draw_takes_from_the_top(self):
        deck = [Card("red", "1"), Card("blue", "2")]
        assert draw(deck) == Card("blue", "2")
        assert deck == [Card("red", "1")]

    def test_draw_empty_raises(self):
        with pytest.raises(EmptyDeck):
            draw([])


class TestReshuffle:

    def test_reshuffle_keeps_top_card(self):
        a, b, c = Card("red", "1"), Card("green", "5"), Card("blue", "7")
        new_deck, new_discard = reshuffle_from_discard([a, b, c], random.Random(3))
        assert new_discard == [c]
        assert Counter(new_deck) == Counter([a, b])

    def test_reshuffle_resets_wild_colors(self):
        wild = Card("wild", "Wild")
        wild.assign_color("red")
        new_deck, _ = reshuffle_from_discard([wild, Card("blue", "3")])
        assert new_deck[0].color == "wild"

    def test_draw_with_empty_deck_rebuilds_from_discard(self):
        room = Room("ABC123")
        a, b, c = Card("red", "1"), Card("green", "5"), Card("blue", "7")
        room.discard_pile = [a, b, c]
        room.current_card = c

        drawn = DeckFactory(seed=11).draw_with_reshuffle(room)

        assert drawn in (a, b)
        assert room.discard_pile == [c]
        assert len(room.deck) == 1
        assert Counter(room.deck + [drawn]) == Counter([a, b])

    def test_no_cards_available(self):
        room = Room("ABC123")
        room.discard_pile = [Card("red", "1")]
        with pytest.raises(NoCardsAvailable):
            DeckFactory().draw_with_reshuffle(room)
        assert room.discard_pile == [Card("red", "1")]
        assert room.deck == []

    def test_seeded_factories_agree(self):
        assert DeckFactory(seed=5).build_deck() == DeckFactory(seed=5).build_deck()
