"""
Leaderboard Core

Modules:
- registry: Participant registry (registration, score mutation)
- ledger: Reward policy and bounded claim history
- ranking: Derived ranking view and podium tiers
- sources: Injectable randomness and identity generators
"""


def __getattr__(name):
    """Lazy imports so submodules can be loaded on their own."""
    if name in ("Participant", "ParticipantRegistry"):
        from claimboard.core import registry
        return getattr(registry, name)
    if name in ("ClaimEvent", "ClaimLedger", "RewardPolicy"):
        from claimboard.core import ledger
        return getattr(ledger, name)
    if name in ("rank", "ranked_entries", "podium_tier", "RankedEntry"):
        from claimboard.core import ranking
        return getattr(ranking, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
