from __future__ import annotations

from .models import Event, EventKind, Table


def format_time(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_duration(minutes: int) -> str:
    # Soma de ocupação pode passar de 24h; as horas crescem em dígitos
    hours, rest = divmod(minutes, 60)
    return f"{hours:02d}:{rest:02d}"


def billed_hours(minutes: int) -> int:
    """Horas cobradas: qualquer fração de hora conta como hora cheia (0 -> 0)."""
    return (minutes + 59) // 60


def render_event(event: Event) -> str:
    if event.kind.is_input and event.raw is not None:
        return event.raw
    stamp = format_time(event.timestamp)
    if event.kind in (EventKind.SIT, EventKind.AUTO_SEAT):
        return f"{stamp} {int(event.kind)} {event.client} {event.table}"
    if event.kind == EventKind.ERROR:
        if event.error is None:
            raise ValueError("evento de erro sem código")
        return f"{stamp} {int(event.kind)} {event.error.value}"
    return f"{stamp} {int(event.kind)} {event.client}"


def render_table(table: Table) -> str:
    return f"{table.number} {table.revenue} {format_duration(table.busy_minutes)}"
