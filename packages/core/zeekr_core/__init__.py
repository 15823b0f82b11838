"""Core app services for settings, logging, style cycling, and performance budgets."""

from .config import AppConfig, load_config, save_config
from .cycler import StyleCycler, StyleNotifier
from .performance import BudgetStatus, FrameRateMeter, PerformanceController, PerformanceTargets

__all__ = [
    "AppConfig",
    "BudgetStatus",
    "FrameRateMeter",
    "PerformanceController",
    "PerformanceTargets",
    "StyleCycler",
    "StyleNotifier",
    "load_config",
    "save_config",
]
