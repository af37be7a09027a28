"""CLI entrypoint for solving a jet pattern.

This module owns CLI argument parsing and run orchestration. Domain logic
lives in the extracted modules:

- ``rock_tower.domain``              – jets, rocks, chamber, drops, cycles
- ``rock_tower.config``              – constants and configuration dataclasses
- ``rock_tower.simulation.engine``   – ``TowerSimulation`` and verification
- ``rock_tower.simulation.persistence`` – Parquet settle log and summaries
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from rock_tower.config.constants import (
    PART_ONE_ROCKS,
    PART_TWO_ROCKS,
    SNAPSHOT_DEPTH,
    VERIFY_CYCLE_MULTIPLE,
)
from rock_tower.config.types import SimulationConfig, SolveConfig
from rock_tower.domain.jets import Direction, JetParseError
from rock_tower.io.paths import (
    read_jet_file,
    run_summary_path,
    settle_log_path,
    summary_json_path,
)
from rock_tower.simulation.engine import TowerSimulation, verify_extrapolation
from rock_tower.simulation.persistence import SettleLog, write_run_summaries
from rock_tower.viz.render import render_tower

logger = logging.getLogger(__name__)


class VerificationError(RuntimeError):
    """Raised when extrapolated and brute-force heights disagree."""


# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool with strict string-check."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        return int(raw)
    raise ValueError(f"{key} must be an integer value")


def _coerce_optional_int(raw: object, key: str) -> int | None:
    if raw is None:
        return None
    return _coerce_int(raw, key)


def _coerce_optional_path(raw: object, key: str) -> Path | None:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a path")
    if isinstance(raw, (str, Path)):
        return Path(raw)
    raise ValueError(f"{key} must be a path")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Report rock tower heights for a jet pattern file"
    )
    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        default=None,
        help="File whose first line is the jet pattern of '<' and '>'",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--part-one-rocks", type=int, default=None)
    parser.add_argument("--part-two-rocks", type=int, default=None)
    parser.add_argument("--snapshot-depth", type=int, default=None)
    parser.add_argument(
        "--retain-rows",
        type=int,
        default=None,
        help="Discard chamber rows further than this below the top",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Write the part one settle log and run summaries here",
    )
    parser.add_argument(
        "--render", type=Path, default=None, help="Save a PNG of the part one tower"
    )
    parser.add_argument(
        "--verify",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Cross-check extrapolation against brute force before solving",
    )
    parser.add_argument("--verify-multiple", type=int, default=None)
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
    )
    return parser


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


def run_solve(jets: Sequence[Direction], config: SolveConfig) -> dict[str, object]:
    """Run both parts and any requested artifacts; return a JSON-ready summary."""
    summary: dict[str, object] = {"jet_count": len(jets)}

    if config.verify:
        verification = verify_extrapolation(
            jets, config.simulation, multiple=config.verify_multiple
        )
        summary["verification"] = {
            "rocks": verification.rocks,
            "brute_force_height": verification.brute_force_height,
            "extrapolated_height": verification.extrapolated_height,
            "cycle_length_rocks": verification.cycle.length_rocks,
            "agrees": verification.agrees,
        }
        if not verification.agrees:
            raise VerificationError(
                f"extrapolated height {verification.extrapolated_height} != "
                f"brute force height {verification.brute_force_height} "
                f"at {verification.rocks} rocks"
            )

    settle_log = None
    if config.out_dir is not None:
        settle_log = SettleLog(settle_log_path(config.out_dir))
    try:
        part_one = TowerSimulation(jets, config.simulation, settle_log=settle_log)
        part_one_result = part_one.run(config.part_one_rocks)
    finally:
        if settle_log is not None:
            settle_log.close()

    if config.render_path is not None:
        rendered = render_tower(part_one.chamber, config.render_path)
        summary["render"] = str(rendered)

    part_two_result = TowerSimulation(jets, config.simulation).run(config.part_two_rocks)

    summary["part_one"] = part_one_result.height
    summary["part_two"] = part_two_result.height
    cycle = part_two_result.cycle
    if cycle is not None:
        summary["cycle"] = {
            "start_rocks": cycle.start_rocks,
            "length_rocks": cycle.length_rocks,
            "length_height": cycle.length_height,
        }

    if config.out_dir is not None:
        write_run_summaries(
            [("part_one", part_one_result), ("part_two", part_two_result)],
            run_summary_path(config.out_dir),
        )
        summary_json_path(config.out_dir).write_text(
            json.dumps(summary, ensure_ascii=False, indent=2) + "\n"
        )
    return summary


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint.

    Supports ``--config path/to/config.json``. CLI arguments override
    config-file values; config-file values override built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must contain a JSON object: {args.config}")

    try:
        input_path = _coerce_optional_path(_get_val(args.input, "input", file_cfg, None), "input")
        log_level = str(_get_val(args.log_level, "log_level", file_cfg, "WARNING")).upper()
        simulation_config = SimulationConfig(
            snapshot_depth=_coerce_int(
                _get_val(args.snapshot_depth, "snapshot_depth", file_cfg, SNAPSHOT_DEPTH),
                "snapshot_depth",
            ),
            retain_rows=_coerce_optional_int(
                _get_val(args.retain_rows, "retain_rows", file_cfg, None), "retain_rows"
            ),
        )
        solve_config = SolveConfig(
            part_one_rocks=_coerce_int(
                _get_val(args.part_one_rocks, "part_one_rocks", file_cfg, PART_ONE_ROCKS),
                "part_one_rocks",
            ),
            part_two_rocks=_coerce_int(
                _get_val(args.part_two_rocks, "part_two_rocks", file_cfg, PART_TWO_ROCKS),
                "part_two_rocks",
            ),
            out_dir=_coerce_optional_path(
                _get_val(args.out_dir, "out_dir", file_cfg, None), "out_dir"
            ),
            render_path=_coerce_optional_path(
                _get_val(args.render, "render", file_cfg, None), "render"
            ),
            verify=_coerce_bool(_get_val(args.verify, "verify", file_cfg, False), "verify"),
            verify_multiple=_coerce_int(
                _get_val(
                    args.verify_multiple, "verify_multiple", file_cfg, VERIFY_CYCLE_MULTIPLE
                ),
                "verify_multiple",
            ),
            simulation=simulation_config,
        )
    except ValueError as exc:
        parser.error(str(exc))

    if input_path is None:
        parser.error("an input file is required (positional argument or 'input' in --config)")
    if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
        parser.error(f"log_level must be one of DEBUG, INFO, WARNING, ERROR; got {log_level}")
    logging.basicConfig(level=log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        jets = read_jet_file(input_path)
    except FileNotFoundError:
        parser.error(f"Input file not found: {input_path}")
    except JetParseError as exc:
        parser.error(f"{input_path}: {exc}")

    try:
        summary = run_solve(jets, solve_config)
    except VerificationError as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc

    print(f"Part 1: {summary['part_one']}")
    print(f"Part 2: {summary['part_two']}")


if __name__ == "__main__":
    main()
