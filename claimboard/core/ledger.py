"""
Claim Ledger and Reward Policy

The reward policy decides how many points a claim is worth; the ledger keeps
a bounded, most-recent-first history of the claims that were granted.

Usage:
    from claimboard.core.ledger import ClaimLedger, RewardPolicy
    amount = RewardPolicy().generate_reward_amount()
    event = ClaimLedger().record_claim(participant, amount)
"""

from collections import deque
from dataclasses import dataclass
from datetime import datetime

from claimboard.config import CLAIM_ID_PREFIX, LEDGER_CAPACITY, REWARD_MAX, REWARD_MIN
from claimboard.core.sources import CounterIdGenerator, NumpyRandomSource
from claimboard.errors import LedgerInvariantError
from claimboard.utils import setup_logging, utcnow

# --- Module Logger ---
logger = setup_logging(__name__)


@dataclass(frozen=True)
class ClaimEvent:
    """
    One granted claim.

    participant_name is copied at claim time so the history stays legible
    if the participant is renamed later.
    """

    claim_id: str
    participant_id: str
    participant_name: str
    amount: int
    timestamp: datetime


class RewardPolicy:
    """Draws reward amounts uniformly from [minimum, maximum]."""

    def __init__(self, random_source=None, minimum: int = REWARD_MIN, maximum: int = REWARD_MAX):
        if minimum < 1:
            raise ValueError(f"Reward minimum must be at least 1, got {minimum}")
        if maximum < minimum:
            raise ValueError(f"Reward maximum {maximum} is below minimum {minimum}")
        self._random = random_source or NumpyRandomSource()
        self.minimum = minimum
        self.maximum = maximum

    def generate_reward_amount(self) -> int:
        return self._random.randint(self.minimum, self.maximum)


class ClaimLedger:
    """Fixed-capacity history of claims, newest first."""

    def __init__(self, capacity: int = LEDGER_CAPACITY, id_generator=None, clock=utcnow):
        if capacity < 1:
            raise ValueError(f"Ledger capacity must be positive, got {capacity}")
        self._next_id = id_generator or CounterIdGenerator(CLAIM_ID_PREFIX)
        self._clock = clock
        # appendleft on a full deque drops the rightmost (oldest) entry
        self._events: deque[ClaimEvent] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._events.maxlen

    def __len__(self):
        return len(self._events)

    def record_claim(self, participant, amount: int) -> ClaimEvent:
        """
        Prepend a claim for an already-rewarded participant.

        Args:
            participant: Snapshot of the participant after the reward
            amount: Points that were granted

        Returns:
            The new ClaimEvent

        Raises:
            LedgerInvariantError: If amount is not a positive integer
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise LedgerInvariantError(f"Reward amount must be a positive integer, got {amount!r}")

        event = ClaimEvent(
            claim_id=self._next_id(),
            participant_id=participant.participant_id,
            participant_name=participant.name,
            amount=amount,
            timestamp=self._clock(),
        )
        if len(self._events) == self.capacity:
            logger.debug(f"Ledger full, evicting claim {self._events[-1].claim_id}")
        self._events.appendleft(event)
        return event

    def recent_claims(self, limit: int | None = None) -> list[ClaimEvent]:
        """
        Most recent claims first.

        Args:
            limit: Maximum number of claims to return (None for all)

        Returns:
            Up to limit claims; fewer if the ledger holds fewer
        """
        if limit is None:
            return list(self._events)
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        return list(self._events)[:limit]
