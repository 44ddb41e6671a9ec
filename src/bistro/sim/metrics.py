from __future__ import annotations

from dataclasses import dataclass
from typing import List

import pandas as pd

from ..formatting import billed_hours, format_duration
from ..models import EventKind, Seating, Table
from .engine import RunResult


@dataclass(slots=True)
class DaySummary:
    total_revenue: int
    total_busy_minutes: int
    avg_utilization: float
    seatings: int
    auto_seats: int
    forced_leaves: int
    rejected_events: int


def tables_to_dataframe(tables: List[Table], day_minutes: int) -> pd.DataFrame:
    data = [
        {
            "table": t.number,
            "revenue": t.revenue,
            "busy_minutes": t.busy_minutes,
            "busy": format_duration(t.busy_minutes),
            "utilization": (t.busy_minutes / day_minutes) if day_minutes > 0 else 0.0,
        }
        for t in tables
    ]
    return pd.DataFrame(data, columns=["table", "revenue", "busy_minutes", "busy", "utilization"])


def seatings_to_dataframe(seatings: List[Seating]) -> pd.DataFrame:
    data = [
        {
            "table": s.table,
            "client": s.client,
            "start": s.start,
            "end": s.end,
            "minutes": s.minutes,
            "billed_hours": billed_hours(s.minutes),
        }
        for s in seatings
    ]
    return pd.DataFrame(data, columns=["table", "client", "start", "end", "minutes", "billed_hours"])


def summarize(result: RunResult) -> DaySummary:
    if not result.accepted or result.schedule is None:
        raise ValueError("só é possível resumir um script aceito")

    df = tables_to_dataframe(result.tables, result.schedule.day_minutes)
    kinds = pd.Series([int(e.kind) for e in result.events], dtype="int64")
    return DaySummary(
        total_revenue=int(df["revenue"].sum()),
        total_busy_minutes=int(df["busy_minutes"].sum()),
        avg_utilization=float(df["utilization"].mean()) if not df.empty else 0.0,
        seatings=len(result.seatings),
        auto_seats=int((kinds == int(EventKind.AUTO_SEAT)).sum()),
        forced_leaves=int((kinds == int(EventKind.FORCED_LEAVE)).sum()),
        rejected_events=int((kinds == int(EventKind.ERROR)).sum()),
    )
