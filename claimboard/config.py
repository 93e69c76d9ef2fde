"""
Central configuration for Claimboard.

All shared constants and configuration values should be defined here
to avoid duplication and ensure consistency across modules.
"""

import logging

# --- Reward Policy Configuration ---
REWARD_MIN = 1  # Smallest reward a single claim can grant
REWARD_MAX = 10  # Largest reward a single claim can grant (inclusive)

# --- Claim Ledger Configuration ---
LEDGER_CAPACITY = 50  # Most recent claims kept in memory
RECENT_CLAIMS_LIMIT = 10  # Claims shown by default in the dashboard

# --- Participant Configuration ---
INITIAL_SCORE = 0
AVATARS = (
    "🧑‍💼", "👨‍🎓", "👩‍💻", "👨‍🚀", "🧑‍🎨",
    "👨‍🔬", "🧑‍🍳", "👨‍🏫", "🧑‍🎤", "👩‍🎨",
)

# --- Identity Configuration ---
PARTICIPANT_ID_PREFIX = "p"
CLAIM_ID_PREFIX = "c"

# --- Podium Configuration ---
# Rank -> (tier, color); ranks outside this map have no tier
PODIUM = {
    1: ("gold", "#FFD700"),
    2: ("silver", "#C0C0C0"),
    3: ("bronze", "#CD7F32"),
}
PODIUM_SIZE = len(PODIUM)

# --- Demo Roster ---
# (name, score, avatar) used to seed the dashboard on first load
DEMO_ROSTER = (
    ("Rahul", 1134590, "🧑‍💼"),
    ("Kamal", 1614546, "👨‍🎓"),
    ("Sanak", 942034, "👩‍💻"),
    ("Thakur", 558378, "👨‍🚀"),
    ("Mukku", 503042, "🧑‍🎨"),
    ("Chetan", 352250, "👨‍🔬"),
    ("Sahil", 346392, "🧑‍🍳"),
    ("Rajput", 343892, "👨‍🏫"),
    ("Sahil K", 321932, "🧑‍🎤"),
    ("Dev", 0, "🧑‍💻"),
)

# --- Logging ---
LOG_LEVEL = logging.INFO

# --- Dashboard ---
DASHBOARD_TITLE = "Live Ranking"
