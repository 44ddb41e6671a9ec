from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from ..formatting import billed_hours, format_time, render_event, render_table
from ..models import Client, ClientStatus, ErrorCode, Event, EventKind, Schedule, Script, Seating, Table
from ..parser import ScriptRejected, parse_script
from .waitlist import WaitingQueue

logger = logging.getLogger(__name__)


class RuleViolation(Exception):
    """Evento recusado por regra de negócio; o estado não é alterado."""

    def __init__(self, code: ErrorCode) -> None:
        super().__init__(code.value)
        self.code = code


@dataclass(slots=True)
class RunResult:
    lines: List[str]
    schedule: Optional[Schedule] = None
    events: List[Event] = field(default_factory=list)
    tables: List[Table] = field(default_factory=list)
    seatings: List[Seating] = field(default_factory=list)
    rejected_at: Optional[int] = None

    @property
    def accepted(self) -> bool:
        return self.rejected_at is None

    def render(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)


class Simulator:
    """Contexto de um dia de operação: mesas, clientes, fila e relógio.

    Cada evento validado passa por ``apply``; ao fim, ``close`` faz o
    fechamento (saídas forçadas em ordem de nome) e o relatório por mesa.
    """

    def __init__(self, schedule: Schedule) -> None:
        self.schedule = schedule
        self.tables: List[Table] = [Table(number=i) for i in range(1, schedule.num_tables + 1)]
        self.clients: Dict[str, Client] = {}
        self.queue = WaitingQueue(schedule.num_tables)
        self.now = schedule.open_time

        self.lines: List[str] = [format_time(schedule.open_time)]
        self.events: List[Event] = []
        self.seatings: List[Seating] = []
        self._occupied = 0
        self._closed = False

        self._handlers: Dict[EventKind, Callable[[Event], None]] = {
            EventKind.ARRIVAL: self._on_arrival,
            EventKind.SIT: self._on_sit,
            EventKind.WAIT: self._on_wait,
            EventKind.LEAVE: self._on_leave,
        }

    # ----- eventos -----
    def apply(self, event: Event) -> None:
        if self._closed:
            raise RuntimeError("simulação já encerrada")
        handler = self._handlers.get(event.kind)
        if handler is None:
            raise ValueError(f"evento de entrada inválido: {event.kind!r}")

        self.now = event.timestamp
        self._emit(event)
        try:
            handler(event)
        except RuleViolation as exc:
            logger.debug("%s: %s recusado (%s)", format_time(self.now), event.kind.name, exc.code.value)
            self._emit(Event(timestamp=self.now, kind=EventKind.ERROR, error=exc.code))

    def _on_arrival(self, event: Event) -> None:
        name = event.client
        if name in self.clients:
            raise RuleViolation(ErrorCode.YOU_SHALL_NOT_PASS)
        if not self.schedule.open_time <= self.now < self.schedule.close_time:
            raise RuleViolation(ErrorCode.NOT_OPEN_YET)
        self.clients[name] = Client(name=name)
        logger.debug("%s: %s chegou", format_time(self.now), name)

    def _on_sit(self, event: Event) -> None:
        client = self.clients.get(event.client)
        if client is None:
            raise RuleViolation(ErrorCode.CLIENT_UNKNOWN)
        number = event.table
        if number is None or not 1 <= number <= self.schedule.num_tables:
            raise RuleViolation(ErrorCode.PLACE_IS_BUSY)
        table = self.tables[number - 1]
        if table.occupant is not None and table.occupant != client.name:
            raise RuleViolation(ErrorCode.PLACE_IS_BUSY)
        if client.status is ClientStatus.SEATED and client.table == number:
            raise RuleViolation(ErrorCode.PLACE_IS_BUSY)

        if client.status is ClientStatus.SEATED:
            self._settle(self.tables[client.table - 1])
        elif client.status is ClientStatus.QUEUED:
            self.queue.remove(client.name)
        self._seat(client, table)

    def _on_wait(self, event: Event) -> None:
        if self._occupied < len(self.tables):
            raise RuleViolation(ErrorCode.I_CAN_WAIT_NO_LONGER)

        name = event.client
        client = self.clients.get(name)
        if self.queue.is_full():
            # Fila cheia: aviso de saída sem código de erro. Quem já está
            # sentado ou na fila mantém o lugar.
            if client is not None and client.status is ClientStatus.PRESENT:
                del self.clients[name]
            self._emit(Event(timestamp=self.now, kind=EventKind.FORCED_LEAVE, client=name))
            return

        if client is not None and client.status is not ClientStatus.PRESENT:
            logger.debug("%s: %s já está %s", format_time(self.now), name, client.status.value)
            return

        if client is None:
            client = self.clients[name] = Client(name=name)
        client.status = ClientStatus.QUEUED
        self.queue.push(name)

    def _on_leave(self, event: Event) -> None:
        client = self.clients.get(event.client)
        if client is None:
            raise RuleViolation(ErrorCode.CLIENT_UNKNOWN)

        freed: Optional[Table] = None
        if client.status is ClientStatus.SEATED:
            freed = self.tables[client.table - 1]
            self._settle(freed)
        del self.clients[client.name]
        self.queue.remove(client.name)

        if freed is not None and len(self.queue) > 0:
            nxt = self.clients[self.queue.pop()]
            self._seat(nxt, freed)
            logger.debug("%s: %s sai da fila para a mesa %d", format_time(self.now), nxt.name, freed.number)
            self._emit(Event(timestamp=self.now, kind=EventKind.AUTO_SEAT, client=nxt.name, table=freed.number))

    # ----- mesas -----
    def _seat(self, client: Client, table: Table) -> None:
        table.occupant = client.name
        table.since = self.now
        client.status = ClientStatus.SEATED
        client.table = table.number
        client.since = self.now
        self._occupied += 1

    def _settle(self, table: Table) -> None:
        minutes = self.now - table.since
        table.busy_minutes += minutes
        table.revenue += billed_hours(minutes) * self.schedule.price
        self.seatings.append(Seating(table=table.number, client=table.occupant, start=table.since, end=self.now))
        table.occupant = None
        self._occupied -= 1

    # ----- fechamento -----
    def close(self) -> None:
        if self._closed:
            return
        self.now = self.schedule.close_time
        logger.debug("fechamento: %d clientes ainda presentes", len(self.clients))
        for name in sorted(self.clients):
            client = self.clients[name]
            if client.status is ClientStatus.SEATED:
                self._settle(self.tables[client.table - 1])
            self._emit(Event(timestamp=self.now, kind=EventKind.FORCED_LEAVE, client=name))
        self.clients.clear()
        self.queue = WaitingQueue(self.schedule.num_tables)

        self.lines.append(format_time(self.schedule.close_time))
        self.lines.extend(render_table(t) for t in self.tables)
        self._closed = True

    def result(self) -> RunResult:
        return RunResult(
            lines=self.lines,
            schedule=self.schedule,
            events=self.events,
            tables=self.tables,
            seatings=self.seatings,
        )

    def _emit(self, event: Event) -> None:
        self.events.append(event)
        self.lines.append(render_event(event))


def run_simulation(script: Script) -> RunResult:
    sim = Simulator(script.schedule)
    for event in script.events:
        sim.apply(event)
    sim.close()
    return sim.result()


def run_script(lines: Iterable[str]) -> RunResult:
    """Valida e simula; em caso de rejeição a saída é só o número da linha."""
    try:
        script = parse_script(lines)
    except ScriptRejected as exc:
        return RunResult(lines=[str(exc.line_no)], rejected_at=exc.line_no)
    return run_simulation(script)
