"""
Leaderboard Service

The single coordinating context for the leaderboard. It exclusively owns the
participant registry and the claim ledger; presentation code gets read
snapshots and calls the action entry points, never the components directly.

Usage:
    from claimboard.service import LeaderboardService
    service = LeaderboardService.from_roster(DEMO_ROSTER)
    result = service.submit_claim(participant_id)
    if result.ok:
        print(result.message)
"""

import threading
from dataclasses import dataclass, field
from typing import Iterable

from claimboard.config import LEDGER_CAPACITY, RECENT_CLAIMS_LIMIT
from claimboard.core.ledger import ClaimEvent, ClaimLedger, RewardPolicy
from claimboard.core.ranking import RankedEntry, ranked_entries
from claimboard.core.registry import Participant, ParticipantRegistry
from claimboard.core.sources import NumpyRandomSource
from claimboard.errors import LeaderboardError, LedgerInvariantError, ValidationError
from claimboard.utils import setup_logging, utcnow

# --- Module Logger ---
logger = setup_logging(__name__)

SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class ClaimOutcome:
    participant: Participant
    event: ClaimEvent

    @property
    def amount(self) -> int:
        return self.event.amount


@dataclass(frozen=True)
class ActionResult:
    """
    Structured notification for one action entry point call.

    Attributes:
        kind: "success" or "error"
        title: Short headline (e.g. "Points Claimed!")
        message: Human-readable description
        participant_name: Name involved in a successful action
        amount: Points granted by a successful claim
        participant: Updated participant snapshot on success
    """

    kind: str
    title: str
    message: str
    participant_name: str | None = None
    amount: int | None = None
    participant: Participant | None = None

    @property
    def ok(self) -> bool:
        return self.kind == SUCCESS


@dataclass(frozen=True)
class LeaderboardSnapshot:
    ranked: list[RankedEntry] = field(default_factory=list)
    recent_claims: list[ClaimEvent] = field(default_factory=list)


class LeaderboardService:
    """Owns registry and ledger state and serializes every mutation."""

    def __init__(
        self,
        random_source=None,
        participant_ids=None,
        claim_ids=None,
        clock=utcnow,
        ledger_capacity: int = LEDGER_CAPACITY,
    ):
        """
        Args:
            random_source: RandomSource shared by reward policy and avatar picks
                (default: unseeded NumpyRandomSource)
            participant_ids: IdGenerator for participants
            claim_ids: IdGenerator for claim events
            clock: Zero-argument callable returning the claim timestamp
            ledger_capacity: How many claims the ledger keeps
        """
        random_source = random_source or NumpyRandomSource()
        self._registry = ParticipantRegistry(random_source, participant_ids)
        self._ledger = ClaimLedger(ledger_capacity, claim_ids, clock)
        self._policy = RewardPolicy(random_source)
        self._lock = threading.RLock()

    @classmethod
    def from_roster(cls, roster: Iterable[tuple], **kwargs) -> "LeaderboardService":
        """
        Build a service preloaded with (name, score[, avatar]) rows.

        Raises:
            ValidationError: If a row has a blank name or a negative score
        """
        service = cls(**kwargs)
        for row in roster:
            service.seed(*row)
        logger.info(f"Seeded leaderboard with {len(service._registry)} participants")
        return service

    # --- Action entry points ---

    def register(self, name) -> Participant:
        """
        Register a new participant.

        Raises:
            ValidationError: If the name is blank after trimming
        """
        with self._lock:
            return self._registry.register(name)

    def seed(self, name, score: int, avatar: str | None = None) -> Participant:
        with self._lock:
            return self._registry.seed(name, score, avatar)

    def claim(self, participant_id) -> ClaimOutcome:
        """
        Grant a random reward to a participant and record it.

        Score update and ledger entry happen together or not at all: if the
        ledger rejects the claim, the participant's previous score is put back
        before the error propagates.

        Args:
            participant_id: Identity of the selected participant

        Returns:
            ClaimOutcome with the updated participant and the new ClaimEvent

        Raises:
            ValidationError: If no participant is selected, or the selected id
                is not on the leaderboard
            LedgerInvariantError: If the reward policy produced a non-positive amount
        """
        if participant_id is None or participant_id == "":
            raise ValidationError(
                "Please select a user to claim points for.", title="No user selected"
            )

        with self._lock:
            if not self._registry.contains(participant_id):
                raise ValidationError(
                    f"Selected user '{participant_id}' is not on the leaderboard.",
                    title="No user selected",
                )

            amount = self._policy.generate_reward_amount()
            before = self._registry.get(participant_id)
            updated = self._registry.apply_reward(participant_id, amount)
            try:
                event = self._ledger.record_claim(updated, amount)
            except Exception:
                self._registry.restore(before)
                raise

        logger.info(f"{updated.name} claimed {amount} points (total {updated.score})")
        return ClaimOutcome(updated, event)

    def submit_registration(self, name) -> ActionResult:
        """register() for presentation code: errors become an ActionResult."""
        try:
            participant = self.register(name)
        except LeaderboardError as e:
            logger.warning(f"Registration rejected: {e.message}")
            return ActionResult(ERROR, e.title, e.message)

        return ActionResult(
            SUCCESS,
            "User Added!",
            f"{participant.name} has been added to the leaderboard.",
            participant_name=participant.name,
            participant=participant,
        )

    def submit_claim(self, participant_id) -> ActionResult:
        """claim() for presentation code: user-facing errors become an ActionResult."""
        try:
            outcome = self.claim(participant_id)
        except LedgerInvariantError:
            raise
        except LeaderboardError as e:
            logger.warning(f"Claim rejected: {e.message}")
            return ActionResult(ERROR, e.title, e.message)

        name = outcome.participant.name
        return ActionResult(
            SUCCESS,
            "Points Claimed!",
            f"{name} earned {outcome.amount} points!",
            participant_name=name,
            amount=outcome.amount,
            participant=outcome.participant,
        )

    # --- Read accessors ---

    def participants(self) -> list[Participant]:
        """Participants in insertion order (e.g. for a selection list)."""
        return self._registry.list()

    def ranked(self) -> list[RankedEntry]:
        return ranked_entries(self._registry.list())

    def recent_claims(self, limit: int | None = RECENT_CLAIMS_LIMIT) -> list[ClaimEvent]:
        return self._ledger.recent_claims(limit)

    def snapshot(self, limit: int | None = RECENT_CLAIMS_LIMIT) -> LeaderboardSnapshot:
        with self._lock:
            return LeaderboardSnapshot(self.ranked(), self.recent_claims(limit))
