from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd


def plot_revenue_bars(df_tables: pd.DataFrame, title: str, out: Path) -> None:
    names = [str(n) for n in df_tables["table"]]
    values = [int(v) for v in df_tables["revenue"]]
    x = list(range(len(names)))
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.bar(x, values, color="#4C78A8")
    ax.set_title(title)
    ax.set_xlabel("mesa")
    ax.set_ylabel("receita")
    ax.set_xticks(x)
    ax.set_xticklabels(names)
    for i, v in enumerate(values):
        ax.text(i, v, f"{v}", ha="center", va="bottom", fontsize=8)
    plt.subplots_adjust(bottom=0.2, top=0.9)
    fig.savefig(out, dpi=150, bbox_inches="tight", pad_inches=0.1)
    plt.close(fig)


def plot_occupancy_gantt(df_seatings: pd.DataFrame, title: str, out: Path, max_tables: int = 20) -> None:
    d = df_seatings[df_seatings["table"] <= max_tables].sort_values("start")
    fig, ax = plt.subplots(figsize=(9, 5))
    for _, row in d.iterrows():
        ax.broken_barh(
            [(row["start"] / 60.0, row["minutes"] / 60.0)],
            (row["table"] * 10, 9),
            facecolors="#54A24B",
        )
    ax.set_xlabel("hora do dia")
    ax.set_ylabel("mesa")
    ax.set_title(title)
    plt.subplots_adjust(bottom=0.2, top=0.9)
    fig.savefig(out, dpi=150, bbox_inches="tight", pad_inches=0.1)
    plt.close(fig)
