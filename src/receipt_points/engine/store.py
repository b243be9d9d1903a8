"""In-memory identifier to score storage."""

import threading
import uuid
from collections.abc import Callable


def generate_id() -> str:
    """Return a random 128-bit identifier in UUID text form."""
    return str(uuid.uuid4())


class ScoreStore:
    """Thread-safe mapping from generated identifiers to scores.

    Records live for the lifetime of the process and are never updated or
    removed.
    """

    def __init__(self, id_factory: Callable[[], str] = generate_id) -> None:
        """
        Initialize an empty store.

        Args:
            id_factory: Callable producing a fresh identifier for each record.
                Collisions are not checked; the default is UUID4.
        """
        self._id_factory = id_factory
        self._scores: dict[str, int] = {}
        self._lock = threading.Lock()

    def put(self, score: int) -> str:
        """Store a score under a new identifier and return the identifier."""
        identifier = self._id_factory()
        with self._lock:
            self._scores[identifier] = score
        return identifier

    def get(self, identifier: str) -> int | None:
        """Return the score for an identifier, or None if it is unknown."""
        with self._lock:
            return self._scores.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._scores

    def __len__(self) -> int:
        with self._lock:
            return len(self._scores)
