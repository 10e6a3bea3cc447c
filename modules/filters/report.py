"""
Filter Reports

Pass/fail tallies for one filter over a whole run.
"""

from dataclasses import dataclass, field
from typing import List

from modules.variant_model import FilterType


@dataclass
class FilterReport:
    """Number of entities passed and failed by one filter, plus free-text notes."""

    filter_type: FilterType
    passed: int
    failed: int
    messages: List[str] = field(default_factory=list)

    def add_message(self, message: str) -> bool:
        self.messages.append(message)
        return True

    def has_messages(self) -> bool:
        return bool(self.messages)

    @property
    def total(self) -> int:
        return self.passed + self.failed

    def __hash__(self) -> int:
        return hash((self.filter_type, self.passed, self.failed, tuple(self.messages)))

    def __str__(self) -> str:
        return (
            f"FilterReport for {self.filter_type}: "
            f"pass:{self.passed} fail:{self.failed} {self.messages}"
        )
