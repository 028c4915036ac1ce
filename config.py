"""Configuration module for the Wikiquote ingestion pipeline."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# API Configuration
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
AUTHOR_MODEL = os.getenv("AUTHOR_MODEL", "claude-3-5-haiku-latest")
QUOTE_MODEL = os.getenv("QUOTE_MODEL", "claude-sonnet-4-5")
LLM_TEMPERATURE = 0  # Deterministic-leaning classification

# Output ceilings per call type
AUTHOR_MAX_TOKENS = int(os.getenv("AUTHOR_MAX_TOKENS", "64"))
QUOTE_MAX_TOKENS = int(os.getenv("QUOTE_MAX_TOKENS", "1024"))

# Retry Policy
MAX_RETRIES = 3

# Quote acceptance
QUOTE_SCORE_THRESHOLD = 50  # Strictly greater than this is accepted
MAX_QUOTE_LENGTH = 500  # Cleaned text
MAX_CANDIDATE_LENGTH = 1000  # Raw candidate, checked before scoring

# Storage Configuration
DB_PATH = Path(os.getenv("DB_PATH", "./output/quotes.db"))

# Ensure output directories exist
DB_PATH.parent.mkdir(parents=True, exist_ok=True)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Source URLs
WIKIQUOTE_URL_TEMPLATE = "https://{language}.wikiquote.org/wiki/{title}"
