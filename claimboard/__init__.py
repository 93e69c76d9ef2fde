"""
Claimboard - Core Package

This package contains the core modules for:
- Participant registry, claim ledger and ranking view (claimboard.core)
- The coordinating leaderboard service (claimboard.service)
- Shared configuration, errors and utilities
"""

__version__ = "1.0.0"
