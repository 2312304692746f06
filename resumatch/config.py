import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    """Read an environment variable, treating empty values as unset."""
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value


# Paths (local development only)
DATA_DIR = Path("data")

# Embeddings (Hugging Face Inference feature-extraction endpoint)
HF_TOKEN = _env("HF_TOKEN")
EMBEDDING_MODEL = _env("EMBEDDING_MODEL", "sentence-transformers/all-MiniLM-L6-v2")
HF_INFERENCE_URL = _env("HF_INFERENCE_URL", "https://router.huggingface.co/hf-inference/models")
EMBEDDING_DIMENSION = int(_env("EMBEDDING_DIMENSION")) if _env("EMBEDDING_DIMENSION") else None
REQUEST_TIMEOUT = 30

# LLM settings (Groq)
GROQ_API_KEY = _env("GROQ_API_KEY")
GROQ_MODEL = _env("GROQ_MODEL", "llama-3.3-70b-versatile")
LLM_TEMPERATURE = 0.0

# Job catalog: "postgres" (pgvector) or "local" (JSON file)
CATALOG_BACKEND = _env("CATALOG_BACKEND", "postgres").lower()
CATALOG_PATH = Path(_env("CATALOG_PATH", str(DATA_DIR / "job_listings.json")))

# Database (PostgreSQL + pgvector)
DATABASE_URL = _env("DATABASE_URL")
PGHOST = _env("PGHOST")
PGDATABASE = _env("PGDATABASE")
PGUSER = _env("PGUSER")
PGPASSWORD = _env("PGPASSWORD")
PGPORT = int(_env("PGPORT", "5432"))
PGSSLMODE = _env("PGSSLMODE", "require")
JOB_TABLE = _env("JOB_TABLE", "job_listings")
JOB_EMBEDDING_COLUMN = _env("JOB_EMBEDDING_COLUMN", "embedding")

# Connection pool
POOL_MAX_SIZE = 10
POOL_IDLE_TIMEOUT = 30.0  # seconds

# Matching settings
TOP_JOBS_COUNT = 3
