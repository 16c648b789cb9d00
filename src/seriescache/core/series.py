"""Series and ErrorLog value types.

Both are immutable: every change produces a new instance. A Series pairs the
admitted values of one declared series (head first) with the policy that
governs them. The ErrorLog is shared by all series of a container and keeps,
newest first, the values each series rejected.
"""

from typing import Any, Iterable, Iterator, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from seriescache.schemas import Policy


class Series:
    """Ordered, bounded values of one series plus its compiled policy.

    The head (position 0) is the most recent value under stack order, or
    the first value under the policy's sorter.
    """

    __slots__ = ("_policy", "_values")

    def __init__(self, policy: "Policy", values: Iterable[Any] = ()):
        self._policy = policy
        self._values = tuple(values)

    @property
    def policy(self) -> "Policy":
        return self._policy

    @property
    def values(self) -> tuple:
        return self._values

    @property
    def head(self) -> Optional[Any]:
        """Head value, or None for an empty series."""
        return self._values[0] if self._values else None

    def replace(self, values: Iterable[Any]) -> "Series":
        return Series(self._policy, values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Series):
            return NotImplemented
        return self._policy == other._policy and self._values == other._values

    __hash__ = None

    def __repr__(self) -> str:
        return f"Series(limit={self._policy.limit}, values={list(self._values)!r})"


class ErrorLog:
    """Bounded, newest-first record of ``(series, rejected value)`` pairs.

    All series share one list; each series is truncated independently to its
    own error limit when a new rejection is recorded.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[tuple[str, Any]] = ()):
        self._entries = tuple((series, value) for series, value in entries)

    @property
    def entries(self) -> tuple[tuple[str, Any], ...]:
        return self._entries

    def record(self, series: str, value: Any, limit: int) -> "ErrorLog":
        """Prepend a rejection and keep at most ``limit`` entries for ``series``.

        Entries of other series are left untouched.
        """
        return ErrorLog(((series, value),) + self._entries).fit(series, limit)

    def fit(self, series: str, limit: int) -> "ErrorLog":
        """Keep at most ``limit`` entries for ``series``, newest first.

        Returns the receiver itself when nothing has to be dropped.
        """
        kept = []
        count = 0
        for entry in self._entries:
            if entry[0] == series:
                if count >= limit:
                    continue
                count += 1
            kept.append(entry)
        if len(kept) == len(self._entries):
            return self
        return ErrorLog(kept)

    def for_series(self, series: str) -> tuple:
        """Rejected values of ``series``, newest first."""
        return tuple(value for name, value in self._entries if name == series)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorLog):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None

    def __repr__(self) -> str:
        return f"ErrorLog({list(self._entries)!r})"
