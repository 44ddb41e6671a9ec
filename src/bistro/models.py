from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional


class EventKind(IntEnum):
    ARRIVAL = 1
    SIT = 2
    WAIT = 3
    LEAVE = 4
    # Gerados pelo próprio simulador
    FORCED_LEAVE = 11
    AUTO_SEAT = 12
    ERROR = 13

    @property
    def is_input(self) -> bool:
        return self.value < 10


class ErrorCode(str, Enum):
    YOU_SHALL_NOT_PASS = "YouShallNotPass"
    NOT_OPEN_YET = "NotOpenYet"
    CLIENT_UNKNOWN = "ClientUnknown"
    PLACE_IS_BUSY = "PlaceIsBusy"
    I_CAN_WAIT_NO_LONGER = "ICanWaitNoLonger!"


@dataclass(slots=True)
class Event:
    timestamp: int  # minutos desde 00:00
    kind: EventKind
    client: Optional[str] = None
    table: Optional[int] = None
    error: Optional[ErrorCode] = None

    # Só para eventos lidos do script
    raw: Optional[str] = None
    line_no: Optional[int] = None


@dataclass(slots=True)
class Schedule:
    num_tables: int
    open_time: int
    close_time: int
    price: int

    @property
    def day_minutes(self) -> int:
        return self.close_time - self.open_time


@dataclass(slots=True)
class Script:
    schedule: Schedule
    events: List[Event] = field(default_factory=list)


@dataclass(slots=True)
class Table:
    number: int
    occupant: Optional[str] = None
    since: int = 0
    busy_minutes: int = 0
    revenue: int = 0

    @property
    def is_free(self) -> bool:
        return self.occupant is None


class ClientStatus(Enum):
    PRESENT = "present"
    QUEUED = "queued"
    SEATED = "seated"


@dataclass(slots=True)
class Client:
    name: str
    status: ClientStatus = ClientStatus.PRESENT
    table: Optional[int] = None
    since: Optional[int] = None


@dataclass(slots=True)
class Seating:
    table: int
    client: str
    start: int
    end: int

    @property
    def minutes(self) -> int:
        return self.end - self.start
