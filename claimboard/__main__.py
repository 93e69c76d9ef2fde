"""
Command-line demo of the leaderboard core.

Seeds the demo roster, runs a number of random claims and prints the
resulting ranking and recent claims.

Usage:
    python -m claimboard --claims 20 --seed 42
"""

import argparse
import sys

from claimboard.config import DEMO_ROSTER, RECENT_CLAIMS_LIMIT
from claimboard.core.sources import NumpyRandomSource
from claimboard.service import LeaderboardService


def main(argv=None):
    parser = argparse.ArgumentParser(description="Simulate claims on the demo leaderboard.")
    parser.add_argument("--claims", type=int, default=10, help="number of random claims to run")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible runs")
    parser.add_argument("--limit", type=int, default=RECENT_CLAIMS_LIMIT, help="recent claims to show")
    args = parser.parse_args(argv)

    random_source = NumpyRandomSource(args.seed)
    service = LeaderboardService.from_roster(DEMO_ROSTER, random_source=random_source)
    participants = service.participants()

    for _ in range(max(args.claims, 0)):
        target = random_source.choice(participants)
        service.claim(target.participant_id)

    snapshot = service.snapshot(args.limit)

    print("=" * 60)
    print("Live Ranking")
    print("=" * 60)
    for entry in snapshot.ranked:
        p = entry.participant
        tier = f" ({entry.tier.name})" if entry.tier else ""
        print(f"#{entry.rank:<3} {p.avatar} {p.name:<12} {p.score:>12,}{tier}")

    if snapshot.recent_claims:
        print("-" * 60)
        print("Recent Claims")
        for claim in snapshot.recent_claims:
            print(f"  {claim.timestamp:%H:%M:%S}  {claim.participant_name} claimed {claim.amount} points")

    return 0


if __name__ == "__main__":
    sys.exit(main())
