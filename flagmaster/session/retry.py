"""In-session retry of missed items.

A missed item comes back a few questions later, then again at growing
gaps, and is retired once the gap schedule is used up. This is a short
"cram" loop inside the long-horizon SM-2 schedule; it only lives as long as
the session does.

Ticks are question counts: the first question of a session is tick 1.
"""

from dataclasses import dataclass
from itertools import count

from flagmaster.config import DEFAULT_RETRY_GAPS
from flagmaster.db.models import Item


@dataclass
class RetryEntry:
    """A pending re-exposure of a missed item."""

    item: Item
    step: int  # Index into the gap schedule
    next_at: int  # Tick at which the item becomes eligible
    order: int  # Insertion sequence, breaks ties on next_at


class RetryQueue:
    """Short-horizon re-insertion of missed items at increasing spacing."""

    def __init__(self, gaps: tuple[int, ...] | list[int] = DEFAULT_RETRY_GAPS):
        gaps = tuple(gaps)
        if not gaps or any(gap <= 0 for gap in gaps):
            raise ValueError(f"Retry gaps must be a non-empty list of positive ticks, got {gaps!r}")
        self.gaps = gaps
        self._entries: dict[str, RetryEntry] = {}
        self._sequence = count()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, code: str) -> bool:
        return code in self._entries

    def entry(self, code: str) -> RetryEntry | None:
        """The pending entry for an item code, if any."""
        return self._entries.get(code)

    def schedule(self, item: Item, current_tick: int) -> RetryEntry:
        """Queue a missed item, restarting its cycle if it is already queued."""
        entry = self._entries.get(item.code)
        if entry is None:
            entry = RetryEntry(item=item, step=0, next_at=0, order=next(self._sequence))
            self._entries[item.code] = entry
        entry.step = 0
        entry.next_at = current_tick + self.gaps[0]
        return entry

    def pop_due(self, current_tick: int) -> Item | None:
        """Return the most overdue eligible item, or None.

        On its last step the entry is removed (final exposure); otherwise it
        is rescheduled at the next gap.
        """
        due = [entry for entry in self._entries.values() if entry.next_at <= current_tick]
        if not due:
            return None

        entry = min(due, key=lambda e: (e.next_at, e.order))
        if entry.step >= len(self.gaps) - 1:
            del self._entries[entry.item.code]
        else:
            entry.step += 1
            entry.next_at = current_tick + self.gaps[entry.step]
        return entry.item

    def force_pop(self, current_tick: int) -> Item | None:
        """Make the earliest entry eligible now and pop it.

        Used when the main queue has run dry so the session doesn't end
        while reinforcement is still pending.
        """
        if not self._entries:
            return None
        entry = min(self._entries.values(), key=lambda e: (e.next_at, e.order))
        entry.next_at = current_tick
        return self.pop_due(current_tick)

    def clear(self) -> None:
        """Drop every pending entry (session end)."""
        self._entries.clear()
