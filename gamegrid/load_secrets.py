import os
from dotenv import load_dotenv

load_dotenv()


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


twitch_client_id = os.getenv("TWITCH_CLIENT_ID")
twitch_client_secret = os.getenv("TWITCH_CLIENT_SECRET")
database_url = os.getenv("DATABASE_URL")
allowed_origin = os.getenv("ALLOWED_ORIGIN")

host = os.getenv("HOST", "0.0.0.0")
port = int(os.getenv("PORT", "3001"))

upstream_timeout = float(os.getenv("UPSTREAM_TIMEOUT", "10.0"))
trust_forwarded_for = _get_bool("TRUST_FORWARDED_FOR", True)

search_rate_limit = int(os.getenv("SEARCH_RATE_LIMIT", "30"))
search_rate_window_seconds = float(os.getenv("SEARCH_RATE_WINDOW_SECONDS", "60"))
rate_limit_sweep_minutes = float(os.getenv("RATE_LIMIT_SWEEP_MINUTES", "5"))

grid_size = int(os.getenv("GRID_SIZE", "9"))
pool_limit = int(os.getenv("POOL_LIMIT", "500"))
search_limit = int(os.getenv("SEARCH_LIMIT", "10"))
min_rating = int(os.getenv("MIN_RATING", "60"))
min_rating_count = int(os.getenv("MIN_RATING_COUNT", "10"))


def missing_credentials() -> list[str]:
    """Return the names of the upstream credential variables that are not set."""
    missing = []
    if not twitch_client_id:
        missing.append("TWITCH_CLIENT_ID")
    if not twitch_client_secret:
        missing.append("TWITCH_CLIENT_SECRET")
    return missing


if __name__ == "__main__":
    print(twitch_client_id, database_url, allowed_origin, port)
