"""
Turn Coordinator for UNO Game

Turn-index arithmetic and resolution of special card effects.
"""

from typing import Dict, Optional
from tools.logger.custom_logging import custom_log
from utils.exceptions.game_exceptions import NoCardsAvailable
from ..models.card import Card, CardValue

LOGGING_SWITCH = False

DEFAULT_DRAW_PENALTIES = {CardValue.DRAW_TWO: 2, CardValue.WILD_DRAW_FOUR: 4}


class CardEffect:
    """Outcome of playing a card"""

    def __init__(self, skip_next: bool = False, target_player_id: Optional[str] = None, cards_drawn: int = 0):
        self.skip_next = skip_next
        self.target_player_id = target_player_id
        self.cards_drawn = cards_drawn

    def __repr__(self):
        return f"CardEffect(skip_next={self.skip_next}, target={self.target_player_id}, drawn={self.cards_drawn})"


def next_index(current: int, direction: int, player_count: int) -> int:
    """Index of the player after ``current`` going in ``direction``.

    next_index(0, 1, 4) == 1, next_index(3, 1, 4) == 0, next_index(0, -1, 4) == 3
    """
    if player_count <= 0:
        return 0
    return (current + direction) % player_count


def _force_draw(room, deck_factory, target_index: int, count: int) -> int:
    target = room.players[target_index]
    drawn = 0
    for _ in range(count):
        try:
            target.add_card_to_hand(deck_factory.draw_with_reshuffle(room))
        except NoCardsAvailable:
            custom_log(
                f"Room {room.code}: no cards left, {target.player_id} drew {drawn}/{count}",
                level="WARNING",
            )
            break
        drawn += 1
    return drawn


def apply_card_effect(card: Card, room, deck_factory, draw_penalties: Optional[Dict[str, int]] = None) -> CardEffect:
    """Resolve the special effect of ``card`` just played in ``room``.

    Reverse flips the room direction; +2 and +4 make the next player draw.
    The caller advances the turn afterwards with ``advance_turn``.
    """
    penalties = draw_penalties or DEFAULT_DRAW_PENALTIES
    player_count = len(room.players)

    if card.value == CardValue.SKIP:
        return CardEffect(skip_next=True)

    if card.value == CardValue.REVERSE:
        room.direction *= -1
        # With two players reverse acts as a skip
        return CardEffect(skip_next=player_count == 2)

    if card.value == CardValue.DRAW_TWO or (card.value == CardValue.WILD_DRAW_FOUR and card.is_wild()):
        if player_count == 0:
            return CardEffect()
        target_index = next_index(room.current_player_index, room.direction, player_count)
        count = penalties.get(card.value, DEFAULT_DRAW_PENALTIES[card.value])
        drawn = _force_draw(room, deck_factory, target_index, count)
        effect = CardEffect(skip_next=True, target_player_id=room.players[target_index].player_id, cards_drawn=drawn)
        custom_log(f"Room {room.code}: {card.value} -> {effect}", isOn=LOGGING_SWITCH)
        return effect

    return CardEffect()


def advance_turn(room, skip_next: bool = False) -> int:
    """Move the turn pointer one step, or two when the next player is skipped."""
    player_count = len(room.players)
    room.current_player_index = next_index(room.current_player_index, room.direction, player_count)
    if skip_next:
        room.current_player_index = next_index(room.current_player_index, room.direction, player_count)
    return room.current_player_index
