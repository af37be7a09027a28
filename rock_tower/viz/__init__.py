"""Visualization layer: static tower renders."""

from rock_tower.viz.render import render_tower, tower_grid

__all__ = ["render_tower", "tower_grid"]
