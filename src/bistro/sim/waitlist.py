from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional, Set


class WaitingQueue:
    """Fila FIFO de nomes com capacidade limitada (= número de mesas)."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self._queue: Deque[str] = deque()
        self._members: Set[str] = set()

    def is_full(self) -> bool:
        return len(self._queue) >= self.capacity

    def push(self, name: str) -> None:
        if self.is_full():
            raise ValueError("fila cheia")
        if name in self._members:
            raise ValueError(f"{name} já está na fila")
        self._queue.append(name)
        self._members.add(name)

    def pop(self) -> Optional[str]:
        if not self._queue:
            return None
        name = self._queue.popleft()
        self._members.discard(name)
        return name

    def remove(self, name: str) -> bool:
        if name not in self._members:
            return False
        self._queue.remove(name)
        self._members.discard(name)
        return True

    def names(self) -> List[str]:
        return list(self._queue)

    def __contains__(self, name: object) -> bool:
        return name in self._members

    def __len__(self) -> int:
        return len(self._queue)
