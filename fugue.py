"""
Fugue position allocator for CRDT-compatible list ordering.

Each replica owns a Fugue instance with a unique client ID. Positions are
plain strings that sort with ordinary string comparison (byte order, i.e.
COLLATE "C" in PostgreSQL), and any replica can create a position between two
existing ones without coordinating with anyone else.

Unlike plain fractional indexing, concurrent inserts at the same spot from
different replicas do not interleave: each replica's run of inserts hangs off
its own waypoint, so runs stay together and are ordered by client ID.

Not thread-safe; guard an instance with a lock if it is shared across threads.
"""

import logging
from typing import Dict, Optional

from base52 import next_odd_value_seq, stringify_base52, stringify_short_name
from fugue_config import get_max_cached_prefixes
from position_utils import (
    FIRST,
    LAST,
    get_prefix,
    left_version,
    sanitize_client_id,
)

logger = logging.getLogger(__name__)


class Fugue:
    """
    Position allocator for a single replica.

    Positions created here embed the (sanitized) client ID in their waypoint
    names. Two instances with the same client ID and the same call history
    produce the same positions.
    """

    FIRST = FIRST
    LAST = LAST

    def __init__(self, client_id: str, max_cached_prefixes: Optional[int] = None):
        """
        Args:
            client_id: Unique ID for this replica. ',' and '.' are stripped.
            max_cached_prefixes: Cache capacity, defaults to FUGUE_MAX_CACHED_PREFIXES

        Raises:
            EmptyClientIDError: If the client ID is empty after sanitizing
        """
        sanitized = sanitize_client_id(client_id)
        self._client_id = sanitized
        # Waypoint names: ",<id>." in general, "<id>." directly under the root
        self._long_name = f",{sanitized}."
        self._first_name = f"{sanitized}."

        if max_cached_prefixes is None:
            max_cached_prefixes = get_max_cached_prefixes()
        if max_cached_prefixes <= 0:
            raise ValueError(f"max_cached_prefixes must be positive, got {max_cached_prefixes}")
        self.max_cached_prefixes = max_cached_prefixes

        # Prefix of each waypoint we allocated into -> last (odd) valueSeq
        self._last_value_seqs: Dict[str, int] = {}

    def __repr__(self):
        return f"<Fugue client_id={self._client_id!r} cached={len(self._last_value_seqs)}>"

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def cache_size(self) -> int:
        """Number of prefixes currently cached."""
        return len(self._last_value_seqs)

    def create_between(self, a: Optional[str], b: Optional[str]) -> str:
        """
        Create a new position strictly between a and b.

        Args:
            a: Existing position, or None to insert at the beginning
            b: Existing position, or None to insert at the end

        Returns:
            A position p with a < p < b

        Bounds that are out of order (a >= b) or beyond LAST are corrected
        with a warning instead of raising, so this never fails.
        """
        left = a
        right = b

        if left is not None and right is not None and left >= right:
            logger.warning(
                f"left must be less than right: {left!r} < {right!r} - using {FIRST!r} instead"
            )
            left = FIRST

        if right is not None and right > LAST:
            logger.warning(
                f"right must be less than or equal to LAST: {right!r} > {LAST!r} - using {LAST!r} instead"
            )
            right = LAST

        if right is not None and (left is None or right.startswith(left)):
            # Left child of right. Always appends a waypoint.
            return self._append_waypoint(left_version(right))

        # Right child of left.
        if left is None:
            # Ancestor is the root.
            return self._append_waypoint("")

        # left's prefix can be reused only if it is ours, and right does not
        # share it (right's older counter would then sort below our new one).
        prefix = get_prefix(left)
        last_value_seq = self._last_value_seqs.get(prefix) if prefix is not None else None
        if last_value_seq is not None and not (right is not None and right.startswith(prefix)):
            value_seq = next_odd_value_seq(last_value_seq)
            self._last_value_seqs[prefix] = value_seq
            return prefix + stringify_base52(value_seq)

        return self._append_waypoint(left)

    def between(self, a: Optional[str], b: Optional[str]) -> str:
        """Alias for create_between."""
        return self.create_between(a, b)

    def after(self, position: Optional[str]) -> str:
        """Create a position right after position (at the end if None)."""
        return self.create_between(position, None)

    def before(self, position: Optional[str]) -> str:
        """Create a position right before position (at the beginning if None)."""
        return self.create_between(None, position)

    def _waypoint_name(self, ancestor: str) -> str:
        """
        Pick the name for a new waypoint of ours under ancestor.

        If one of our waypoints already appears in ancestor, use a short
        back-reference to it instead of repeating the client ID. Since ','
        and '.' never occur inside client IDs or counters, a match on the
        long name can only be a waypoint we created.
        """
        if ancestor.startswith(self._first_name):
            existing = 0
        else:
            existing = ancestor.rfind(self._long_name)

        if existing == -1:
            return self._first_name if ancestor == "" else self._long_name

        # Index among long-name waypoints, counted backwards from the end.
        # Every long name ends with '.', which appears nowhere else.
        index = ancestor.count(".", existing) - 1
        return stringify_short_name(index)

    def _append_waypoint(self, ancestor: str) -> str:
        """Create a position under a new (or reused) waypoint of ours."""
        prefix = ancestor + self._waypoint_name(ancestor)
        last_value_seq = self._last_value_seqs.get(prefix)
        # Next odd (right-side) valueSeq, 1 for a fresh waypoint
        value_seq = 1 if last_value_seq is None else next_odd_value_seq(last_value_seq)
        self._last_value_seqs[prefix] = value_seq
        self._evict_cached_prefixes()
        return prefix + stringify_base52(value_seq)

    def _evict_cached_prefixes(self) -> None:
        """
        Trim the cache back to max_cached_prefixes.

        Keeps the prefixes with the largest counters, a rough stand-in for
        the most recently used ones. Evicting a prefix only means the next
        insert after it creates a fresh waypoint.
        """
        if len(self._last_value_seqs) <= self.max_cached_prefixes:
            return

        entries = sorted(self._last_value_seqs.items(), key=lambda item: item[1], reverse=True)
        self._last_value_seqs = dict(entries[: self.max_cached_prefixes])
        logger.debug(f"Evicted cached prefixes down to {self.max_cached_prefixes}")
