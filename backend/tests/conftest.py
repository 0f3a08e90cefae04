import os
import sys
from pathlib import Path

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("SECRET_KEY", "test-secret-key-1234567890abcdef")
os.environ.setdefault("STRUCTURED_LOGGING_ENABLED", "false")
os.environ.setdefault("TRACING_ENABLED", "false")
os.environ.setdefault("RATE_LIMIT_PER_MINUTE", "1000")
