from typing import Dict, Any, Union
import json

from utils.exceptions.validation_exceptions import ValidationError

# Inbound action type -> fields that must be present
ACTION_REQUIRED_FIELDS = {
    'create_lobby': ['playerId', 'playerName'],
    'join_lobby': ['roomCode', 'playerId', 'playerName'],
    'leave_lobby': ['roomCode', 'playerId'],
    'start_game': ['roomCode'],
    'play_card': ['roomCode', 'playerId', 'card'],
    'draw_card': ['roomCode', 'playerId'],
    'call_uno': ['roomCode', 'playerId'],
}

ID_FIELDS = ('roomCode', 'playerId', 'playerName')


class ActionValidator:
    """Validator for inbound game action envelopes."""

    def __init__(self, max_message_length: int = 65536):
        self.max_message_length = max_message_length

    def parse_envelope(self, raw: Union[str, bytes, Dict[str, Any]]) -> Dict[str, Any]:
        """Turn a raw frame (JSON text or already-decoded dict) into an envelope dict."""
        if isinstance(raw, bytes):
            try:
                raw = raw.decode('utf-8')
            except UnicodeDecodeError:
                raise ValidationError("Frame is not valid UTF-8")

        if isinstance(raw, str):
            if len(raw) > self.max_message_length:
                raise ValidationError(f"Frame too large ({len(raw)} chars)")
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as e:
                raise ValidationError(f"Invalid JSON format: {str(e)}")

        if not isinstance(raw, dict):
            raise ValidationError("Envelope must be a JSON object")
        return raw

    def validate_action(self, envelope: Dict[str, Any]) -> str:
        """Check the envelope type and required fields; returns the action type.

        Identifier fields are normalised to strings in place.
        """
        action_type = envelope.get('type')
        if action_type not in ACTION_REQUIRED_FIELDS:
            raise ValidationError(f"Unknown action type: {action_type!r}")

        for field in ACTION_REQUIRED_FIELDS[action_type]:
            if envelope.get(field) in (None, ''):
                raise ValidationError(f"{action_type}: missing field '{field}'")

        for field in ID_FIELDS:
            value = envelope.get(field)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (str, int)):
                raise ValidationError(f"{action_type}: field '{field}' must be a string")
            envelope[field] = str(value)

        if action_type == 'play_card':
            self.validate_card(envelope['card'])

        return action_type

    def validate_card(self, card: Any) -> None:
        if not isinstance(card, dict):
            raise ValidationError("play_card: 'card' must be an object")
        if card.get('value') in (None, ''):
            raise ValidationError("play_card: card has no value")
        chosen = card.get('chosenColor')
        if chosen is not None and not isinstance(chosen, str):
            raise ValidationError("play_card: 'chosenColor' must be a string")
