"""Static category catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

SafetyLevel = Literal["safe", "moderate", "risky"]


@dataclass(frozen=True)
class Category:
    """A logical grouping of cleanable items.

    Categories are static configuration; ``supports_file_selection``
    decides whether the picker offers per-file selection or treats the
    category as all-or-nothing.
    """

    id: str
    name: str
    group: str
    description: str
    safety_level: SafetyLevel = "safe"
    safety_note: str = ""
    supports_file_selection: bool = False


CATEGORIES: dict[str, Category] = {
    c.id: c
    for c in (
        Category(
            id="system-cache",
            name="User Cache Files",
            group="System Junk",
            description="Application caches stored in ~/.cache",
            safety_level="moderate",
            safety_note="Some apps may need to rebuild cache on next launch",
        ),
        Category(
            id="system-logs",
            name="Log Files",
            group="System Junk",
            description="Application and rotated logs in your home directory",
            safety_level="moderate",
            safety_note="Logs may be useful for debugging issues",
        ),
        Category(
            id="temp-files",
            name="Temporary Files",
            group="System Junk",
            description="Your temporary files in /tmp older than a day",
        ),
        Category(
            id="trash",
            name="Trash",
            group="Storage",
            description="Files in the Trash bin",
        ),
        Category(
            id="downloads",
            name="Old Downloads",
            group="Storage",
            description="Downloads older than 30 days",
            safety_level="risky",
            safety_note="May contain important files you forgot about",
            supports_file_selection=True,
        ),
        Category(
            id="browser-cache",
            name="Browser Cache",
            group="Browsers",
            description="Cache from Chrome, Chromium, Firefox and Brave",
        ),
        Category(
            id="dev-cache",
            name="Development Cache",
            group="Development",
            description="pip, npm, yarn and cargo download caches",
            safety_level="moderate",
            safety_note="Projects will need to re-download dependencies",
        ),
        Category(
            id="large-files",
            name="Large Files",
            group="Large Files",
            description="Files larger than 500MB for review",
            safety_level="risky",
            safety_note="Review each file carefully before deleting",
            supports_file_selection=True,
        ),
        Category(
            id="duplicates",
            name="Duplicate Files",
            group="Storage",
            description="Files with identical content",
            safety_level="risky",
            safety_note="Review carefully - keeps the oldest copy",
            supports_file_selection=True,
        ),
    )
}


def get_category(category_id: str) -> Category:
    """Look up a catalog category, raising ``KeyError`` for unknown ids."""
    try:
        return CATEGORIES[category_id]
    except KeyError:
        raise KeyError(f"Unknown category: {category_id}") from None
