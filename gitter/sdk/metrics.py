"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Gitter client, a product of Garudex Labs

Rate-limit metadata captured from response headers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

RATE_LIMIT_HEADER = "x-ratelimit-limit"
REMAINING_HEADER = "x-ratelimit-remaining"
RESET_HEADER = "x-ratelimit-reset"


@dataclass
class RateLimitMetrics:
    """Quota counters reported by the most recently completed response.

    One instance is shared by every request of a client.  Each response
    overwrites all three fields (last write wins), so under concurrent
    requests a value may already belong to a different call than the one
    the caller just awaited.  Treat it as advisory.
    """

    rate_limit: Optional[int] = None
    remaining: Optional[int] = None
    reset: Optional[int] = None

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        """Overwrite every field from ``headers``; absent or non-numeric values become ``None``."""
        lowered = {k.lower(): v for k, v in headers.items()}
        self.rate_limit = _parse_int(lowered.get(RATE_LIMIT_HEADER))
        self.remaining = _parse_int(lowered.get(REMAINING_HEADER))
        self.reset = _parse_int(lowered.get(RESET_HEADER))


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None
