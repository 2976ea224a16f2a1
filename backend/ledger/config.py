"""Settings read from the environment."""
import os


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


_origins_env = os.getenv("ALLOWED_ORIGINS", "")
ALLOWED_ORIGINS = [o.strip() for o in _origins_env.split(",") if o.strip()] if _origins_env else ["*"]

SELF_NAME = os.getenv("LEDGER_SELF_NAME", "Me")
SELF_EMAIL = os.getenv("LEDGER_SELF_EMAIL") or None

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_JSON = _flag("LOG_JSON", "true")

# Raise instead of dropping residuals when a balance report does not net to zero.
SETTLEMENT_STRICT = _flag("SETTLEMENT_STRICT", "false")
