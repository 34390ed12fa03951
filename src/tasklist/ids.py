"""Task id generation."""

from __future__ import annotations

import itertools
import secrets
import time
from collections.abc import Callable


class IdGenerator:
    """Generates ids of the form ``<epoch-ms>-<seq>-<random hex>``.

    The sequence number makes ids from one generator unique even when the
    clock and the random draw repeat. Ids are only ever compared for
    equality, never parsed.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._seq = itertools.count()

    def __call__(self) -> str:
        millis = int(self._clock() * 1000)
        return f"{millis}-{next(self._seq)}-{secrets.token_hex(8)}"
