"""
Runtime configuration for StreakShare.

Everything is read from the environment once at import time. Nothing here
talks to the network; clients are built lazily by the service modules.
"""

import os

# Supabase (share store + persistence mirror)
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")

RESULTS_TABLE = os.getenv("RESULTS_TABLE", "game_results")
SHARE_STORE_TABLE = os.getenv("SHARE_STORE_TABLE", "share_store")
ENTRIES_TABLE = os.getenv("ENTRIES_TABLE", "entries")

# Telegram
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")
TELEGRAM_API_BASE = f"https://api.telegram.org/bot{TELEGRAM_BOT_TOKEN}"

# Web / logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", "10000"))

# Well-known share store keys, shared with the ingestion side
LATEST_RESULT_KEY = "latestGameResult"
QUEUED_RESULTS_KEY = "gameResults"
LAST_SAVE_KEY = "lastShareExtensionSave"
