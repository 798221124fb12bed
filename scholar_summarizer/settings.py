"""Configuration settings for the scholar summarizer."""

import logging
import os
from dotenv import load_dotenv

load_dotenv()

# Logging setup
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)

# Search
PAGE_SIZE = 10
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30.0"))

# arXiv
ARXIV_RATE_LIMIT_SECONDS = float(os.getenv("ARXIV_RATE_LIMIT_SECONDS", "3.0"))

# Semantic Scholar
SEMANTIC_SCHOLAR_API_KEY = os.getenv("SEMANTIC_SCHOLAR_API_KEY")
SEMANTIC_SCHOLAR_BASE_URL = "https://api.semanticscholar.org/graph/v1"

# CrossRef (no key, but the polite pool wants a contact address)
CROSSREF_BASE_URL = "https://api.crossref.org"
CROSSREF_MAILTO = os.getenv("CROSSREF_MAILTO", "scholar.summarizer@example.com")
CROSSREF_USER_AGENT = f"ScholarSummarizer/1.0 (mailto:{CROSSREF_MAILTO})"

# CORE
CORE_API_KEY = os.getenv("CORE_API_KEY")
CORE_BASE_URL = "https://api.core.ac.uk/v3"

# OpenRouter
# Available models via OpenRouter:
# - google/gemini-2.5-flash (default, fast)
# - anthropic/claude-3-5-sonnet (balanced)
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_DEFAULT_MODEL = os.getenv("OPENROUTER_DEFAULT_MODEL", "google/gemini-2.5-flash")
OPENAI_EMBEDDING_MODEL = os.getenv("OPENAI_EMBEDDING_MODEL", "openai/text-embedding-3-small")

# Anthropic (direct API)
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
ANTHROPIC_DEFAULT_MODEL = "claude-3-haiku-20240307"

# Retry settings for LLM-backed flows
MAX_RETRIES = 3
RETRY_INITIAL_DELAY_MS = 2000
