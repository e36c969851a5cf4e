"""
Classification vocabulary shared by every detector.

The priority is an explicit ordered enumeration carried next to the free-text
classification reason. The reason stays a human-readable audit string; the
priority decides whether a new decision may replace an existing one.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Union

REASON_DEFAULT = "Default"
REASON_AUTO_TRANSFER = "Auto-Transfer"
REASON_AUTO_CC_PAYMENT = "Auto-CC Payment"
REASON_MANUAL = "Manual"
REASON_PATTERN_PREFIX = "Pattern: "
REASON_PAYEE_RULE_PREFIX = "Payee Rule: "


class ClassificationType(Enum):
    """Coarse classification of a transaction."""
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"
    IGNORED = "ignored"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: Union[str, "ClassificationType", None]) -> "ClassificationType":
        """Parse a stored classification type, defaulting to EXPENSE."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.EXPENSE


class ClassificationPriority(IntEnum):
    """Priority levels for classification resolution (higher wins)."""
    DEFAULT = 0
    PATTERN_INCOME = 1
    AUTO_TRANSFER = 2
    AUTO_CC_PAYMENT = 3
    MANUAL = 4
    PAYEE_RULE = 5

    @classmethod
    def from_reason(cls, reason: Optional[str]) -> "ClassificationPriority":
        """
        Recover the priority of a persisted reason string.

        Only used for records written before the priority was stored
        explicitly; new decisions always carry their priority.

        Args:
            reason: Classification reason (e.g. "Payee Rule: Acme", "Manual")

        Returns:
            Matching priority, DEFAULT for None or unknown reasons
        """
        if not reason:
            return cls.DEFAULT

        lowered = reason.strip().lower()
        if lowered.startswith("payee rule"):
            return cls.PAYEE_RULE
        if lowered == "manual":
            return cls.MANUAL
        if "auto-cc" in lowered or "cc payment" in lowered:
            return cls.AUTO_CC_PAYMENT
        if "auto-transfer" in lowered:
            return cls.AUTO_TRANSFER
        if lowered.startswith("pattern"):
            return cls.PATTERN_INCOME
        return cls.DEFAULT


PriorityLike = Union[ClassificationPriority, str, None]


def to_priority(value: PriorityLike) -> ClassificationPriority:
    """Coerce a priority or a reason string into a ClassificationPriority."""
    if isinstance(value, ClassificationPriority):
        return value
    return ClassificationPriority.from_reason(value)


def can_override(new: PriorityLike, existing: PriorityLike) -> bool:
    """
    Check if a new classification may replace an existing one.

    Equal priorities never override, so re-running a pass is a no-op.

    Args:
        new: Priority (or reason) of the candidate classification
        existing: Priority (or reason) currently on the transaction

    Returns:
        True if the new priority is strictly higher
    """
    return to_priority(new) > to_priority(existing)


@dataclass(frozen=True)
class ClassificationDecision:
    """A classification a detector would like to apply to one transaction."""
    category: Optional[str]
    reason: str
    priority: ClassificationPriority
    classification_type: Optional[ClassificationType] = None
    fill_only: bool = False  # Only set the category when the transaction has none
