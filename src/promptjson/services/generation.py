"""Request generation counter for latest-request-wins handling."""

import itertools


class RequestGeneration:
    """
    Monotonically increasing request token.

    Each async operation captures a token with begin() and checks
    is_current() before applying its result; starting a newer request
    invalidates every older token.
    """

    def __init__(self):
        self._counter = itertools.count(1)
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def begin(self) -> int:
        """Start a new generation and return its token."""
        self._current = next(self._counter)
        return self._current

    def is_current(self, token: int) -> bool:
        return token == self._current
