"""
Locking helpers

Two layers are used to serialize check-then-write sequences:
- KeyedLockRegistry: in-process mutual exclusion scoped to a key (a room
  id, a booking id), so unrelated keys never wait on each other.
- lock_queryset_if_possible: row-level SELECT ... FOR UPDATE, which
  serializes writers across processes on databases that support it.

The in-process lock must be acquired before the transaction opens and
released after it commits, otherwise a waiter could read a snapshot
taken before the holder's commit.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator

from django.db import transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

logger = logging.getLogger(__name__)


class _Slot:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.holders = 0


class KeyedLockRegistry:
    """
    Arena of locks keyed by an identifier

    Slots are created on first use and dropped once no thread holds or
    waits for them, so the registry does not grow with the number of
    rooms ever booked.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._guard = threading.Lock()
        self._slots: Dict[Hashable, _Slot] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        key = str(key)
        with self._guard:
            slot = self._slots.get(key)
            if slot is None:
                slot = self._slots[key] = _Slot()
            slot.holders += 1

        slot.lock.acquire()
        logger.debug(f"Acquired {self.name} lock for {key}")
        try:
            yield
        finally:
            slot.lock.release()
            with self._guard:
                slot.holders -= 1
                if slot.holders == 0:
                    self._slots.pop(key, None)

    def __len__(self) -> int:
        with self._guard:
            return len(self._slots)


def lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection(queryset.db).in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


room_locks = KeyedLockRegistry("room")
booking_locks = KeyedLockRegistry("booking")
