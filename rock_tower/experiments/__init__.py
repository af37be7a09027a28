"""Experiments layer: CLI entrypoint and two-part solve orchestration."""

from rock_tower.experiments.solve import VerificationError, main, run_solve

__all__ = ["VerificationError", "main", "run_solve"]
