"""The fixed roster of chat participants and their wire ids."""

from __future__ import annotations

PARTICIPANTS: tuple[str, ...] = ("The Peddler", "The Other")


class UnknownParticipantError(LookupError):
    """Raised for a participant id or name not on the roster."""


def get_participant_name(participant_id: int) -> str:
    """Return the name for ``participant_id``."""
    if not 0 <= participant_id < len(PARTICIPANTS):
        raise UnknownParticipantError(f"unknown participant id {participant_id}")
    return PARTICIPANTS[participant_id]


def get_participant_id(name: str) -> int:
    """Return the wire id for ``name``."""
    try:
        return PARTICIPANTS.index(name)
    except ValueError:
        raise UnknownParticipantError(f"unknown participant {name!r}") from None