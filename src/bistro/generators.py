from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .formatting import format_time, render_event
from .models import Event, EventKind
from .parser import MAX_PRICE, MAX_TABLES, parse_time

LAST_MINUTE = 23 * 60 + 59


@dataclass(slots=True)
class ScriptConfig:
    num_tables: int = 3
    open_time: str = "09:00"
    close_time: str = "19:00"
    price: int = 10
    num_clients: int = 20
    sit_probability: float = 0.7  # resto tenta a fila
    leave_probability: float = 0.8  # resto fica até o fechamento
    seed: int = 123


def generate_script(config: ScriptConfig) -> List[str]:
    """Gera um script sintético, válido e em ordem de horário."""
    if not 1 <= config.num_tables <= MAX_TABLES:
        raise ValueError("num_tables inválido")
    if not 1 <= config.price <= MAX_PRICE:
        raise ValueError("price inválido")
    if config.num_clients < 0:
        raise ValueError("num_clients inválido")
    open_time, close_time = parse_time(config.open_time), parse_time(config.close_time)
    if open_time is None or close_time is None or open_time >= close_time:
        raise ValueError("horário de funcionamento inválido")

    rng = np.random.default_rng(config.seed)
    n = config.num_clients

    # Alguns chegam antes de abrir, para exercitar NotOpenYet
    arrivals = rng.integers(max(0, open_time - 30), close_time, size=n)
    sits = rng.uniform(size=n) < config.sit_probability
    leaves = rng.uniform(size=n) < config.leave_probability
    tables = rng.integers(1, config.num_tables + 1, size=n)
    delays = rng.integers(0, 15, size=n)
    stays = rng.integers(10, 180, size=n)

    timeline: List[Tuple[int, int, Event]] = []

    def add(ts: int, event: Event) -> None:
        timeline.append((ts, len(timeline), event))

    for i in range(n):
        name = f"client{i + 1}"
        t0 = int(arrivals[i])
        add(t0, Event(timestamp=t0, kind=EventKind.ARRIVAL, client=name))

        t1 = min(t0 + int(delays[i]), LAST_MINUTE)
        if sits[i]:
            add(t1, Event(timestamp=t1, kind=EventKind.SIT, client=name, table=int(tables[i])))
        else:
            add(t1, Event(timestamp=t1, kind=EventKind.WAIT, client=name))

        t2 = t1 + int(stays[i])
        if leaves[i] and t2 <= LAST_MINUTE:
            add(t2, Event(timestamp=t2, kind=EventKind.LEAVE, client=name))

    timeline.sort(key=lambda item: (item[0], item[1]))

    lines = [
        str(config.num_tables),
        f"{format_time(open_time)} {format_time(close_time)}",
        str(config.price),
    ]
    lines.extend(render_event(event) for _, _, event in timeline)
    return lines
