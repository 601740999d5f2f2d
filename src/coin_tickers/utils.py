"""Shared utilities for ticker fetching."""
import re
from datetime import datetime, timezone

NULL_ADDRESS = "0x0000000000000000000000000000000000000000"

_NULL_ADDRESS_RE = re.compile(r"^0x0*$")


def normalize_address(address: str) -> str:
    """Canonical form of a contract address (lowercase, trimmed).

    CoinGecko sometimes reports a native coin's contract as an empty string;
    that maps to NULL_ADDRESS.
    """
    value = address.strip().lower()
    return value or NULL_ADDRESS


def is_null_address(address: str) -> bool:
    """True for the zero address in any length (e.g. "0x0", "0x000...0")."""
    return bool(_NULL_ADDRESS_RE.match(normalize_address(address)))


def parse_timestamp(ts: float | str | None) -> datetime | None:
    """Convert a Unix timestamp (seconds) or ISO-8601 string to an aware datetime."""
    if ts is None or ts == "":
        return None
    if isinstance(ts, str):
        return datetime.fromisoformat(ts.replace("Z", "+00:00"))
    return datetime.fromtimestamp(ts, tz=timezone.utc)
