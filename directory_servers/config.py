import os

from dotenv import load_dotenv

# Load configuration from .env file or environment
load_dotenv()

# Slack
SLACK_BOT_TOKEN = os.getenv("SLACK_BOT_TOKEN")
SLACK_BASE_URL = os.getenv("SLACK_BASE_URL", "https://slack.com/api/")
SLACK_TIMEOUT = float(os.getenv("SLACK_TIMEOUT", "30"))

# Not part of Slack's published API; point it at whatever your workspace exposes.
SLACK_SET_MANAGER_METHOD = os.getenv("SLACK_SET_MANAGER_METHOD", "conversations.setManager")

# Directory lookups refetch on every call unless a TTL (seconds) is set
_cache_ttl = os.getenv("SLACK_DIRECTORY_CACHE_TTL")
SLACK_DIRECTORY_CACHE_TTL = float(_cache_ttl) if _cache_ttl else None
