"""Cleaning result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field

from broom.models.category import Category


@dataclass(slots=True)
class CleanResult:
    """Result of cleaning one category."""

    category: Category
    cleaned_items: int = 0
    freed_space: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass(slots=True)
class CleanSummary:
    """Aggregate of all per-category clean results."""

    results: list[CleanResult] = field(default_factory=list)

    def add(self, result: CleanResult) -> None:
        self.results.append(result)

    @property
    def total_freed_space(self) -> int:
        return sum(r.freed_space for r in self.results)

    @property
    def total_cleaned_items(self) -> int:
        return sum(r.cleaned_items for r in self.results)

    @property
    def total_errors(self) -> int:
        return sum(len(r.errors) for r in self.results)
