"""
Participant Registry

Holds the mutable collection of participants and their scores. The registry
is the only owner of participant records; everything it hands out is a frozen
snapshot, so callers can never corrupt its state.

Usage:
    from claimboard.core.registry import ParticipantRegistry
    registry = ParticipantRegistry()
    alice = registry.register("Alice")
    alice = registry.apply_reward(alice.participant_id, 7)
"""

import threading
from dataclasses import dataclass, replace

from claimboard.config import AVATARS, INITIAL_SCORE, PARTICIPANT_ID_PREFIX
from claimboard.core.sources import CounterIdGenerator, NumpyRandomSource
from claimboard.errors import NotFoundError, ValidationError
from claimboard.utils import normalize_name, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


@dataclass(frozen=True)
class Participant:
    """Snapshot of a participant at a point in time."""

    participant_id: str
    name: str
    score: int = INITIAL_SCORE
    avatar: str = AVATARS[0]


class ParticipantRegistry:
    """Insertion-ordered set of participants keyed by identity."""

    def __init__(self, random_source=None, id_generator=None, avatars=AVATARS):
        self._random = random_source or NumpyRandomSource()
        self._next_id = id_generator or CounterIdGenerator(PARTICIPANT_ID_PREFIX)
        self._avatars = tuple(avatars)
        # dicts keep insertion order, which list() relies on
        self._participants: dict[str, Participant] = {}
        self._lock = threading.RLock()

    def __len__(self):
        return len(self._participants)

    def __contains__(self, participant_id):
        return participant_id in self._participants

    def contains(self, participant_id) -> bool:
        return participant_id in self

    def register(self, name) -> Participant:
        """
        Add a new participant with score 0 and a random avatar.

        Args:
            name: Display name; surrounding whitespace is dropped

        Returns:
            The newly created participant

        Raises:
            ValidationError: If the name is blank after trimming
        """
        clean_name = normalize_name(name)
        avatar = self._random.choice(self._avatars)
        participant = self._insert(clean_name, INITIAL_SCORE, avatar)
        logger.info(f"Registered {participant.name} ({participant.participant_id})")
        return participant

    def seed(self, name, score: int, avatar: str | None = None) -> Participant:
        """
        Add a participant with a preset score, e.g. from a starting roster.

        Raises:
            ValidationError: If the name is blank or the score is negative
        """
        clean_name = normalize_name(name)
        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            raise ValidationError(f"Score must be a non-negative integer, got {score!r}.")
        if avatar is None:
            avatar = self._random.choice(self._avatars)
        return self._insert(clean_name, score, avatar)

    def _insert(self, name: str, score: int, avatar: str) -> Participant:
        with self._lock:
            participant_id = self._next_id()
            if participant_id in self._participants:
                raise RuntimeError(f"Identity generator reused id '{participant_id}'")
            participant = Participant(participant_id, name, score, avatar)
            self._participants[participant_id] = participant
            return participant

    def get(self, participant_id) -> Participant:
        """
        Look up a participant by identity.

        Raises:
            NotFoundError: If no participant has that identity
        """
        try:
            return self._participants[participant_id]
        except KeyError:
            raise NotFoundError(participant_id) from None

    def apply_reward(self, participant_id, amount: int) -> Participant:
        """
        Add amount to a participant's score.

        The read-modify-write happens under the registry lock so no other
        mutation of the same record can interleave. Non-positive amounts are
        not rejected here; the reward policy never produces them.

        Args:
            participant_id: Identity of the participant to reward
            amount: Points to add

        Returns:
            The updated participant

        Raises:
            NotFoundError: If no participant has that identity
        """
        with self._lock:
            current = self.get(participant_id)
            updated = replace(current, score=current.score + amount)
            self._participants[participant_id] = updated
        logger.debug(f"{updated.name}: {current.score} -> {updated.score}")
        return updated

    def restore(self, snapshot: Participant) -> None:
        """Put back an earlier snapshot of an existing participant."""
        with self._lock:
            if snapshot.participant_id not in self._participants:
                raise NotFoundError(snapshot.participant_id)
            self._participants[snapshot.participant_id] = snapshot

    def list(self) -> list[Participant]:
        """Snapshot of all participants in insertion order."""
        with self._lock:
            return list(self._participants.values())
