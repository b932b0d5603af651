"""Broom data models."""

from broom.models.category import CATEGORIES, Category, SafetyLevel, get_category
from broom.models.scan_result import CleanableItem, ScanResult
from broom.models.clean_result import CleanResult, CleanSummary

__all__ = [
    "CATEGORIES",
    "Category",
    "CleanResult",
    "CleanSummary",
    "CleanableItem",
    "SafetyLevel",
    "ScanResult",
    "get_category",
]
