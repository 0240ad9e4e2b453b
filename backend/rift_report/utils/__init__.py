"""Shared helper functions."""

from .statistics import round_half_up, percent, kda_ratio

__all__ = ["round_half_up", "percent", "kda_ratio"]
