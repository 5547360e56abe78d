class GameError(Exception):
    """Base class for errors raised by the UNO game core."""

    # Stable identifier sent to clients alongside the message
    code = "game_error"

    def __init__(self, message: str):
        """
        Initialize the game error.

        Args:
            message: Human readable description, safe to show to players
        """
        self.message = message
        super().__init__(self.message)


class RoomNotFound(GameError):
    code = "room_not_found"

    def __init__(self, message: str = "Lobby not found"):
        super().__init__(message)


class RoomFull(GameError):
    code = "room_full"

    def __init__(self, message: str = "Lobby is full"):
        super().__init__(message)


class GameInProgress(GameError):
    code = "game_in_progress"

    def __init__(self, message: str = "Game already in progress"):
        super().__init__(message)


class EmptyDeck(GameError):
    """Raised when drawing from a deck with no cards; reshuffle the discard first."""
    code = "empty_deck"

    def __init__(self, message: str = "Deck is empty"):
        super().__init__(message)


class NoCardsAvailable(GameError):
    """Raised when both the deck and the reshufflable discard pile are exhausted."""
    code = "no_cards_available"

    def __init__(self, message: str = "No cards left to draw"):
        super().__init__(message)


class RoomCodeExhausted(GameError):
    code = "room_code_exhausted"

    def __init__(self, message: str = "Could not allocate a free room code"):
        super().__init__(message)


class PlayerAlreadyInRoom(GameError):
    code = "player_already_in_room"

    def __init__(self, message: str = "Player already in lobby"):
        super().__init__(message)
