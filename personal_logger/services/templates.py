"""
Personal Logger — Quick Entry Templates
========================================

What:  The one-tap phrases offered in the capture modal for each entry type.
Who:   Served by GET /api/templates; the UI copies a phrase into the text box,
       and the result goes through the normal append path.
"""

from typing import Dict, List

from personal_logger.schemas.entry import EntryType

TEMPLATES: Dict[EntryType, List[str]] = {
    EntryType.ISSUE: [
        "Equipment malfunction",
        "Understaffed shift",
        "Supply shortage",
        "Customer complaint",
        "Safety concern",
    ],
    EntryType.TASK: [
        "Restock supplies",
        "Clean equipment",
        "Update schedule",
        "Call supplier",
        "Train new staff",
    ],
    EntryType.NOTE: [
        "Shift handover",
        "Good performance",
        "Process improvement",
        "Customer feedback",
        "General observation",
    ],
}


def templates_for(entry_type: EntryType | str) -> List[str]:
    """Template phrases for one type (a copy; callers may mutate it)."""
    return list(TEMPLATES[EntryType(entry_type)])


def all_templates() -> Dict[EntryType, List[str]]:
    return {entry_type: list(phrases) for entry_type, phrases in TEMPLATES.items()}
