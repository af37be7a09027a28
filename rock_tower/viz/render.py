"""Matplotlib-based static rendering of a settled chamber."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import ListedColormap

from rock_tower.domain.chamber import Chamber
from rock_tower.io.paths import resolve_within_base as _resolve_within_base

AIR_COLOR = "#f4f1ea"
ROCK_COLOR = "#6b5b4b"
GRID_LINE_COLOR = "#d8d2c6"


def tower_grid(chamber: Chamber, max_rows: int | None = None) -> np.ndarray:
    """Return the top ``max_rows`` held rows as a (rows, width) int array, lowest first."""
    grid = chamber.to_array().astype(int)
    if max_rows is not None:
        if max_rows < 1:
            raise ValueError("max_rows must be >= 1")
        grid = grid[-max_rows:]
    return grid


def render_tower(
    chamber: Chamber,
    output_path: Path,
    max_rows: int | None = 200,
    base_dir: Path | None = None,
    title: str | None = None,
) -> Path:
    """Save a PNG of the top of the tower and return its resolved path."""
    if base_dir is None:
        output_path = Path(output_path).resolve()
    else:
        output_path = _resolve_within_base(Path(output_path), Path(base_dir).resolve())
    output_path.parent.mkdir(parents=True, exist_ok=True)

    grid = tower_grid(chamber, max_rows)
    rows, width = grid.shape
    bottom = chamber.height - rows

    fig_height = max(2.0, min(40.0, rows * 0.12))
    fig, ax = plt.subplots(figsize=(2.5, fig_height))
    try:
        ax.imshow(
            grid if rows else np.zeros((1, width), dtype=int),
            cmap=ListedColormap([AIR_COLOR, ROCK_COLOR]),
            vmin=0,
            vmax=1,
            origin="lower",
            aspect="equal",
            interpolation="nearest",
        )
        for x in range(width + 1):
            ax.axvline(x - 0.5, color=GRID_LINE_COLOR, linewidth=0.3)
        ax.set_xticks([])
        ax.set_ylabel(f"rows {bottom}..{chamber.height - 1}" if rows else "empty")
        ax.set_yticks([])
        ax.set_title(title or f"height {chamber.height}", fontsize=9)
        fig.savefig(output_path, dpi=100, bbox_inches="tight")
    finally:
        plt.close(fig)
    return output_path
