"""
Ranking View

Derives the display order of the registry. Nothing here is stored: ranks and
podium tiers are recomputed from current scores every time they are needed.

Ordering rules:
- Descending score
- Ties keep the order they had in the input (stable sort)
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

import pandas as pd

from claimboard.config import PODIUM, PODIUM_SIZE

RANKING_COLUMNS = ['rank', 'tier', 'name', 'score', 'avatar', 'participant_id']
CLAIM_COLUMNS = ['claim_id', 'participant_id', 'participant_name', 'amount', 'timestamp']


@dataclass(frozen=True)
class PodiumTier:
    name: str
    color: str


@dataclass(frozen=True)
class RankedEntry:
    rank: int
    participant: object
    tier: PodiumTier | None = None


def rank(participants: Iterable) -> list:
    """Participants sorted by descending score; equal scores keep input order."""
    # sorted() is stable, so ties keep input order
    return sorted(participants, key=lambda p: -p.score)


def podium_tier(position: int) -> PodiumTier | None:
    """Gold/silver/bronze for ranks 1-3, None otherwise."""
    if position not in PODIUM:
        return None
    name, color = PODIUM[position]
    return PodiumTier(name, color)


def ranked_entries(participants: Iterable) -> list[RankedEntry]:
    return [
        RankedEntry(rank=i + 1, participant=p, tier=podium_tier(i + 1))
        for i, p in enumerate(rank(participants))
    ]


def split_podium(entries: Sequence[RankedEntry]) -> tuple[list[RankedEntry], list[RankedEntry]]:
    """
    Split ranked entries into the podium and everyone else.

    The podium is only shown when there are enough participants to fill it;
    otherwise everybody goes to the list.
    """
    entries = list(entries)
    if len(entries) < PODIUM_SIZE:
        return [], entries
    return entries[:PODIUM_SIZE], entries[PODIUM_SIZE:]


def ranking_frame(participants: Iterable) -> pd.DataFrame:
    """
    Ranked participants as a DataFrame.

    Returns:
        DataFrame with columns: rank, tier, name, score, avatar, participant_id
    """
    rows = [
        {
            'rank': entry.rank,
            'tier': entry.tier.name if entry.tier else None,
            'name': entry.participant.name,
            'score': entry.participant.score,
            'avatar': entry.participant.avatar,
            'participant_id': entry.participant.participant_id,
        }
        for entry in ranked_entries(participants)
    ]
    return pd.DataFrame(rows, columns=RANKING_COLUMNS)


def claims_frame(claims: Iterable) -> pd.DataFrame:
    """
    Claim events as a DataFrame, in the order given (newest first from the ledger).

    Returns:
        DataFrame with columns: claim_id, participant_id, participant_name, amount, timestamp
    """
    rows = [
        {
            'claim_id': c.claim_id,
            'participant_id': c.participant_id,
            'participant_name': c.participant_name,
            'amount': c.amount,
            'timestamp': c.timestamp,
        }
        for c in claims
    ]
    return pd.DataFrame(rows, columns=CLAIM_COLUMNS)
