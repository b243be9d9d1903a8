"""Per-submitter first-use bonus tracking."""

import threading
from collections import defaultdict

# (prior submissions below, bonus) from loosest to tightest; the last match wins
BONUS_TIERS = ((3, 250), (2, 500), (1, 1000))


def bonus_for(times_processed: int) -> int:
    """Return the bonus for a submitter with ``times_processed`` prior receipts.

    1st receipt earns 1000, 2nd 500, 3rd 250, every later one 0.
    """
    bonus = 0
    for limit, points in BONUS_TIERS:
        if times_processed < limit:
            bonus = points
    return bonus


class BonusTracker:
    """Counts scored receipts per submitter key and hands out bonus tiers.

    ``next_bonus`` reads and advances a key's counter under one lock, so
    concurrent submissions from the same submitter never observe the same
    prior count.
    """

    def __init__(self) -> None:
        self._counts: defaultdict[str, int] = defaultdict(int)
        self._lock = threading.Lock()

    def _fetch_and_increment(self, submitter_key: str) -> int:
        with self._lock:
            prior = self._counts[submitter_key]
            self._counts[submitter_key] = prior + 1
        return prior

    def next_bonus(self, submitter_key: str) -> int:
        """Consume the next bonus tier for a submitter.

        Args:
            submitter_key: Identity of the submitter

        Returns:
            Bonus points for this submission
        """
        return bonus_for(self._fetch_and_increment(submitter_key))

    def times_processed(self, submitter_key: str) -> int:
        """Return how many receipts have been scored for a submitter."""
        with self._lock:
            return self._counts.get(submitter_key, 0)
