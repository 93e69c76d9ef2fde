"""
Tests for the leaderboard service (claim orchestration and action entry points).
"""

import threading
from datetime import datetime, timezone

import pytest

from claimboard.__main__ import main as cli_main
from claimboard.config import DEMO_ROSTER, LEDGER_CAPACITY
from claimboard.core.sources import CounterIdGenerator, FixedRandomSource, NumpyRandomSource
from claimboard.errors import LedgerInvariantError, ValidationError
from claimboard.service import ERROR, SUCCESS, LeaderboardService

FIXED_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_service(values=(7,), **kwargs):
    return LeaderboardService(
        random_source=FixedRandomSource(values),
        participant_ids=CounterIdGenerator("p"),
        claim_ids=CounterIdGenerator("c"),
        clock=lambda: FIXED_TIME,
        **kwargs,
    )


def state(service):
    return service.participants(), service.recent_claims(None)


class TestClaim:
    """Tests for the Claim composite operation."""

    def test_bob_gets_exactly_seven(self):
        service = make_service(values=[7])
        service.seed("Alice", 50)
        bob = service.seed("Bob", 50)

        outcome = service.claim(bob.participant_id)

        assert outcome.participant.score == 57
        assert outcome.amount == 7
        newest = service.recent_claims(1)[0]
        assert newest == outcome.event
        assert (newest.participant_name, newest.amount) == ("Bob", 7)
        assert newest.participant_id == bob.participant_id

    def test_score_grows_by_amount_in_range(self):
        service = LeaderboardService(random_source=NumpyRandomSource(seed=5))
        alice = service.register("Alice")
        previous = 0
        for i in range(100):
            outcome = service.claim(alice.participant_id)
            assert 1 <= outcome.amount <= 10
            assert outcome.participant.score == previous + outcome.amount
            assert service.recent_claims(1)[0] is outcome.event
            assert len(service.recent_claims(None)) == min(i + 1, LEDGER_CAPACITY)
            previous = outcome.participant.score

    @pytest.mark.parametrize("participant_id", [None, ""])
    def test_no_selection(self, participant_id):
        service = make_service()
        service.register("Alice")
        before = state(service)
        with pytest.raises(ValidationError) as exc_info:
            service.claim(participant_id)
        assert exc_info.value.title == "No user selected"
        assert state(service) == before

    def test_unknown_participant(self):
        service = make_service()
        service.register("Alice")
        before = state(service)
        with pytest.raises(ValidationError) as exc_info:
            service.claim("p999")
        assert exc_info.value.title == "No user selected"
        assert "p999" in exc_info.value.message
        assert state(service) == before

    def test_ledger_failure_rolls_back_score(self):
        # A zero reward reaches the ledger and trips its invariant
        service = make_service(values=[0])
        alice = service.seed("Alice", 10, "🧑‍💼")
        with pytest.raises(LedgerInvariantError):
            service.claim(alice.participant_id)
        assert service.participants()[0].score == 10
        assert service.recent_claims(None) == []

    def test_concurrent_claims_are_serialized(self):
        service = make_service(values=[1])
        alice = service.register("Alice")
        threads_count, per_thread = 8, 200

        def worker():
            for _ in range(per_thread):
                service.claim(alice.participant_id)

        threads = [threading.Thread(target=worker) for _ in range(threads_count)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        total = threads_count * per_thread
        assert service.participants()[0].score == total
        claims = service.recent_claims(None)
        assert len(claims) == min(total, LEDGER_CAPACITY)
        assert len({c.claim_id for c in claims}) == len(claims)

    def test_ledger_cap_through_service(self):
        service = make_service(values=[1])
        alice = service.register("Alice")
        first = service.claim(alice.participant_id).event
        for _ in range(LEDGER_CAPACITY):
            service.claim(alice.participant_id)
        claims = service.recent_claims(None)
        assert len(claims) == LEDGER_CAPACITY
        assert first not in claims
        assert service.participants()[0].score == LEDGER_CAPACITY + 1


class TestRegister:
    """Tests for registration through the service."""

    def test_blank_name(self):
        service = make_service()
        with pytest.raises(ValidationError):
            service.register("   ")
        assert service.participants() == []

    def test_unique_ids(self):
        service = make_service()
        ids = {service.register(f"user{i}").participant_id for i in range(30)}
        assert len(ids) == 30


class TestActionResults:
    """Tests for the notification-returning entry points."""

    def test_claim_success(self):
        service = make_service(values=[7])
        bob = service.seed("Bob", 0, "🧑‍🎤")
        result = service.submit_claim(bob.participant_id)
        assert result.ok
        assert result.kind == SUCCESS
        assert result.title == "Points Claimed!"
        assert result.message == "Bob earned 7 points!"
        assert (result.participant_name, result.amount) == ("Bob", 7)

    def test_claim_without_selection(self):
        service = make_service()
        result = service.submit_claim(None)
        assert not result.ok
        assert result.kind == ERROR
        assert result.title == "No user selected"
        assert result.message == "Please select a user to claim points for."

    def test_claim_unknown(self):
        result = make_service().submit_claim("ghost")
        assert result.kind == ERROR
        assert result.title == "No user selected"
        assert "ghost" in result.message

    def test_invariant_failure_is_not_a_notification(self):
        service = make_service(values=[0])
        alice = service.seed("Alice", 0, "🧑‍💼")
        with pytest.raises(LedgerInvariantError):
            service.submit_claim(alice.participant_id)

    def test_registration_success(self):
        result = make_service().submit_registration("  Dev ")
        assert result.ok
        assert result.title == "User Added!"
        assert result.message == "Dev has been added to the leaderboard."
        assert result.participant.score == 0

    def test_registration_blank(self):
        service = make_service()
        result = service.submit_registration("   ")
        assert result.kind == ERROR
        assert result.title == "Invalid name"
        assert service.participants() == []

    def test_service_usable_after_errors(self):
        service = make_service(values=[3])
        service.submit_registration("")
        service.submit_claim(None)
        alice = service.register("Alice")
        assert service.claim(alice.participant_id).participant.score == 3


class TestReadAccessors:
    """Tests for ranked() / recent_claims() / snapshot()."""

    def test_ranked_scenario(self):
        service = make_service()
        service.seed("Alice", 50)
        service.seed("Bob", 50)
        service.seed("Carol", 10)
        assert [e.participant.name for e in service.ranked()] == ["Alice", "Bob", "Carol"]
        assert [e.rank for e in service.ranked()] == [1, 2, 3]

    def test_rank_recomputed_after_claim(self):
        service = make_service(values=[5])
        service.seed("Alice", 50)
        bob = service.seed("Bob", 48)
        service.claim(bob.participant_id)
        assert [e.participant.name for e in service.ranked()] == ["Bob", "Alice"]

    def test_recent_claims_default_limit(self):
        service = make_service(values=[1])
        alice = service.register("Alice")
        for _ in range(15):
            service.claim(alice.participant_id)
        assert len(service.recent_claims()) == 10
        assert len(service.recent_claims(None)) == 15

    def test_snapshot(self):
        service = make_service(values=[2])
        alice = service.register("Alice")
        service.claim(alice.participant_id)
        snapshot = service.snapshot()
        assert snapshot.ranked[0].participant.score == 2
        assert snapshot.recent_claims[0].amount == 2

    def test_snapshot_does_not_track_later_changes(self):
        service = make_service(values=[2])
        alice = service.register("Alice")
        snapshot = service.snapshot()
        service.claim(alice.participant_id)
        assert snapshot.ranked[0].participant.score == 0
        assert snapshot.recent_claims == []


class TestRoster:
    """Tests for seeding from a roster."""

    def test_demo_roster(self):
        service = LeaderboardService.from_roster(DEMO_ROSTER)
        ranked = service.ranked()
        assert len(ranked) == len(DEMO_ROSTER)
        assert ranked[0].participant.name == "Kamal"
        assert ranked[-1].participant.name == "Dev"

    def test_bad_roster_row(self):
        with pytest.raises(ValidationError):
            LeaderboardService.from_roster([("Ok", 1), (" ", 2)])


class TestCli:
    """Tests for the python -m claimboard demo."""

    def test_runs(self, capsys):
        assert cli_main(["--claims", "5", "--seed", "1"]) == 0
        out = capsys.readouterr().out
        assert "Live Ranking" in out
        assert "Recent Claims" in out
        assert "Kamal" in out
