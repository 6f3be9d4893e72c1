import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./timebox.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_TIME_ZONE = os.getenv("DEFAULT_TIME_ZONE", "UTC")

# Run the conflict guard after every schedule (costs a pairwise scan)
VERIFY_ALLOCATIONS = os.getenv("TIMEBOX_VERIFY_ALLOCATIONS", "false").lower() in ("1", "true", "yes")

# Pin the ranking jitter for every request; unset means a fresh draw per run
_seed = os.getenv("SCHEDULER_SEED")
SCHEDULER_SEED = int(_seed) if _seed else None
