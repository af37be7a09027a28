"""Path construction helpers for simulation inputs and output directories.

Centralises the directory/file naming conventions used by the engine and
the CLI.
"""

from __future__ import annotations

from pathlib import Path

from rock_tower.domain.jets import Direction, JetParseError, parse_jets


def resolve_within_base(path: Path, base_dir: Path) -> Path:
    """Resolve *path* and ensure it stays within the trusted *base_dir*.

    Raises :exc:`ValueError` if the resolved path escapes the base directory.
    """
    candidate = path if path.is_absolute() else base_dir / path
    resolved = candidate.resolve()
    base_resolved = base_dir.resolve()
    if resolved != base_resolved and base_resolved not in resolved.parents:
        raise ValueError(f"Path escapes base_dir: {path}")
    return resolved


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def settle_log_path(out_dir: Path) -> Path:
    """Return path to the settle log Parquet file."""
    return logs_dir(out_dir) / "settle_log.parquet"


def run_summary_path(out_dir: Path) -> Path:
    """Return path to the run summary Parquet file."""
    return logs_dir(out_dir) / "run_summary.parquet"


def summary_json_path(out_dir: Path) -> Path:
    """Return path to the human-readable JSON summary."""
    return out_dir / "summary.json"


def read_jet_file(path: Path) -> tuple[Direction, ...]:
    """Read the first line of *path* as a jet pattern."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise JetParseError(f"jet pattern is not valid UTF-8 text: {exc}") from exc
    stripped = text.strip()
    first_line = stripped.splitlines()[0] if stripped else ""
    return parse_jets(first_line)
