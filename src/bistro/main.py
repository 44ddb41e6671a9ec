from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import List, Optional

from .generators import ScriptConfig, generate_script
from .plots import plot_occupancy_gantt, plot_revenue_bars
from .sim.engine import RunResult, run_script
from .sim.metrics import seatings_to_dataframe, summarize, tables_to_dataframe

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RunConfig:
    input_path: Path
    outputs: Optional[Path] = None
    verbose: bool = False


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-7s | %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def write_outputs(result: RunResult, outputs_dir: Path) -> None:
    outputs_dir.mkdir(parents=True, exist_ok=True)

    df_tables = tables_to_dataframe(result.tables, result.schedule.day_minutes)
    df_tables.to_csv(outputs_dir / "tables.csv", index=False)
    df_seatings = seatings_to_dataframe(result.seatings)
    df_seatings.to_csv(outputs_dir / "seatings.csv", index=False)

    summary = summarize(result)
    (outputs_dir / "summary.json").write_text(json.dumps(asdict(summary), indent=2), encoding="utf-8")

    plot_revenue_bars(df_tables, "Receita por mesa", outputs_dir / "revenue_bars.png")
    plot_occupancy_gantt(df_seatings, "Ocupação das mesas", outputs_dir / "occupancy_gantt.png")
    logger.info("relatórios gravados em %s", outputs_dir)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Simula um dia de operação do salão a partir de um script de eventos"
    )
    parser.add_argument("input", type=str, help="Arquivo de script de entrada")
    parser.add_argument(
        "--outputs",
        type=str,
        default=None,
        help="Diretório de saída para CSV/JSON/PNG (opcional)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log detalhado em stderr")
    args = parser.parse_args(argv)

    config = RunConfig(
        input_path=Path(args.input),
        outputs=Path(args.outputs) if args.outputs else None,
        verbose=args.verbose,
    )
    configure_logging(config.verbose)

    try:
        # Bytes inválidos viram surrogates e a linha é rejeitada pelo parser
        text = config.input_path.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        logger.debug("falha ao ler %s: %s", config.input_path, exc)
        print("Cannot open input file", file=sys.stderr)
        return 1

    result = run_script(text.split("\n"))
    sys.stdout.write(result.render())

    if config.outputs is not None and result.accepted:
        write_outputs(result, config.outputs)
    return 0


def generate_main(argv: Optional[List[str]] = None) -> int:
    defaults = ScriptConfig()
    parser = argparse.ArgumentParser(description="Gera um script sintético de eventos")
    parser.add_argument("--tables", type=int, default=defaults.num_tables, help="Número de mesas")
    parser.add_argument("--open", type=str, default=defaults.open_time, help="Abertura HH:MM")
    parser.add_argument("--close", type=str, default=defaults.close_time, help="Fechamento HH:MM")
    parser.add_argument("--price", type=int, default=defaults.price, help="Preço por hora")
    parser.add_argument("--clients", type=int, default=defaults.num_clients, help="Número de clientes")
    parser.add_argument("--seed", type=int, default=defaults.seed, help="Semente do gerador")
    args = parser.parse_args(argv)

    config = ScriptConfig(
        num_tables=args.tables,
        open_time=args.open,
        close_time=args.close,
        price=args.price,
        num_clients=args.clients,
        seed=args.seed,
    )
    try:
        lines = generate_script(config)
    except ValueError as exc:
        parser.error(str(exc))
    sys.stdout.write("".join(f"{line}\n" for line in lines))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
