"""
Central configuration: game constants, logging, backend settings.
"""

import os

# Game parameters
WINNING_SCORE = 121
PEG_LIMIT = 31
FIFTEEN = 15
HAND_SIZE = 6
DISCARD_COUNT = 2
PLAYERS = (1, 2)
INITIAL_DEALER = int(os.getenv("CRIBBAGE_INITIAL_DEALER", "1"))

# Safety bound on consecutive automatic GOs in one check
AUTO_PASS_MAX_STEPS = 4

# Logging
LOG_LEVEL = os.getenv("CRIBBAGE_LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("CRIBBAGE_LOG_FILE") or None
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

# Backend
CORS_ORIGINS = os.getenv("CRIBBAGE_CORS_ORIGINS", "*").split(",")
API_PREFIX = "/api"

# Open tables kept in memory; finished games are evicted first, then the oldest
MAX_GAMES = int(os.getenv("CRIBBAGE_MAX_GAMES", "1000"))
