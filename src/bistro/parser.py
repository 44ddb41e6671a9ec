"""Validação do script de entrada.

O script é aceito por inteiro ou rejeitado na primeira linha inválida; o
simulador só recebe eventos já validados.
"""
from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator, List, NoReturn, Optional, Tuple

from .models import Event, EventKind, Schedule, Script

logger = logging.getLogger(__name__)

MAX_TABLES = 1000
MAX_PRICE = 1_000_000_000

_TIME_RE = re.compile(r"([0-9]{2}):([0-9]{2})")
_DIGITS_RE = re.compile(r"[0-9]+")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_NAME_RE = re.compile(r"[a-z0-9_-]+")
# Separadores de token: só espaço em branco ASCII
_SEP_RE = re.compile(r"[ \t\n\v\f\r]+")

# Ids de evento e números de mesa acima disso não cabem em nenhum limite válido
_MAX_INT_DIGITS = 10

# id do evento -> aridade (nome [, mesa])
_ARITY = {
    EventKind.ARRIVAL: 1,
    EventKind.SIT: 2,
    EventKind.WAIT: 1,
    EventKind.LEAVE: 1,
}


class ScriptRejected(ValueError):
    def __init__(self, line_no: int) -> None:
        super().__init__(f"script rejeitado na linha {line_no}")
        self.line_no = line_no


def parse_time(token: str) -> Optional[int]:
    m = _TIME_RE.fullmatch(token)
    if m is None:
        return None
    hh, mm = int(m.group(1)), int(m.group(2))
    if hh > 23 or mm > 59:
        return None
    return hh * 60 + mm


def parse_positive_int(token: str, limit: int) -> Optional[int]:
    if _DIGITS_RE.fullmatch(token) is None:
        return None
    digits = token.lstrip("0")
    if len(digits) > len(str(limit)):
        return None
    value = int(digits or "0")
    if value <= 0 or value > limit:
        return None
    return value


def _parse_int(token: str) -> Optional[int]:
    if _INT_RE.fullmatch(token) is None:
        return None
    digits = token.lstrip("+-").lstrip("0")
    if len(digits) > _MAX_INT_DIGITS:
        return None
    value = int(digits or "0")
    return -value if token.startswith("-") else value


def split_tokens(line: str) -> List[str]:
    return [t for t in _SEP_RE.split(line) if t]


def is_valid_name(token: str) -> bool:
    return _NAME_RE.fullmatch(token) is not None


def _parse_hours(line: str) -> Optional[Tuple[int, int]]:
    tokens = split_tokens(line)
    # Só os dois primeiros tokens importam; o resto da linha é ignorado
    if len(tokens) < 2:
        return None
    open_time, close_time = parse_time(tokens[0]), parse_time(tokens[1])
    if open_time is None or close_time is None or open_time >= close_time:
        return None
    return open_time, close_time


def _parse_event(line: str, line_no: int, num_tables: int, previous: int) -> Optional[Event]:
    tokens = split_tokens(line)
    if len(tokens) < 2:
        return None
    timestamp = parse_time(tokens[0])
    if timestamp is None or timestamp < previous:
        return None
    event_id = _parse_int(tokens[1])
    try:
        kind = EventKind(event_id)
    except ValueError:
        return None
    if kind not in _ARITY:
        return None

    args = tokens[2:]
    if len(args) != _ARITY[kind] or not is_valid_name(args[0]):
        return None

    table = None
    if kind == EventKind.SIT:
        table = _parse_int(args[1])
        if table is None or not 1 <= table <= num_tables:
            return None

    return Event(
        timestamp=timestamp,
        kind=kind,
        client=args[0],
        table=table,
        raw=line,
        line_no=line_no,
    )


def parse_script(lines: Iterable[str]) -> Script:
    """Valida o script inteiro e devolve cabeçalho + eventos em ordem.

    Lança ``ScriptRejected`` com o número (1-based) da primeira linha inválida.
    As linhas do cabeçalho contam sempre; entre os eventos, linhas vazias são
    ignoradas e não contam.
    """
    it: Iterator[str] = (line.rstrip("\n") for line in lines)

    header: List[str] = []
    for line_no in (1, 2, 3):
        line = next(it, None)
        if line is None:
            _reject(line_no)
        header.append(line)

    num_tables = parse_positive_int(header[0], MAX_TABLES)
    if num_tables is None:
        _reject(1)
    hours = _parse_hours(header[1])
    if hours is None:
        _reject(2)
    price = parse_positive_int(header[2], MAX_PRICE)
    if price is None:
        _reject(3)

    schedule = Schedule(num_tables=num_tables, open_time=hours[0], close_time=hours[1], price=price)
    script = Script(schedule=schedule)

    line_no = 3
    previous = 0
    for line in it:
        if line == "":
            continue
        line_no += 1
        event = _parse_event(line, line_no, num_tables, previous)
        if event is None:
            _reject(line_no)
        previous = event.timestamp
        script.events.append(event)

    logger.debug("script aceito: %d mesas, %d eventos", num_tables, len(script.events))
    return script


def _reject(line_no: int) -> NoReturn:
    logger.info("script rejeitado na linha %d", line_no)
    raise ScriptRejected(line_no)
