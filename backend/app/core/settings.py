# backend/app/core/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

# LLM provider (any OpenAI-compatible endpoint, Groq by default)
LLM_API_KEY = os.getenv("LLM_API_KEY") or os.getenv("GROQ_API_KEY") or os.getenv("OPENAI_API_KEY")
LLM_BASE_URL = os.getenv("LLM_BASE_URL", "https://api.groq.com/openai/v1")
LLM_MODEL = os.getenv("LLM_MODEL", "llama-3.1-8b-instant")
LLM_CALLS_PER_MINUTE = int(os.getenv("LLM_CALLS_PER_MINUTE", "18"))

# Deadline applied to every gateway call made by a session
GATEWAY_TIMEOUT_SECONDS = float(os.getenv("GATEWAY_TIMEOUT_SECONDS", "60"))

# Sessions untouched for this long are dropped; 0 keeps them forever
SESSION_IDLE_TTL_SECONDS = float(os.getenv("SESSION_IDLE_TTL_SECONDS", "3600"))

URL_FETCH_TIMEOUT_SECONDS = float(os.getenv("URL_FETCH_TIMEOUT_SECONDS", "20"))
MAX_URL_CONTENT_LENGTH = 30000

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./codeleap.db")

API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "5010"))
