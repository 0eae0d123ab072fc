from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Optional

# Key prefix under which localization providers keep the position labels
TRANSLATION_KEY_PREFIX = "money.enums.currency-position"


class CurrencyPosition(Enum):
    """Placement of the currency symbol relative to the formatted number."""

    LEFT = "left"
    LEFT_WITH_SPACE = "left-with-space"
    RIGHT = "right"
    RIGHT_WITH_SPACE = "right-with-space"
    HIDDEN = "hidden"  # symbol is not shown at all

    @property
    def translation_key(self) -> str:
        """Key used to look up the human-readable label of this position."""
        return f"{TRANSLATION_KEY_PREFIX}.{self.value}"

    @classmethod
    def options(cls, translate: Optional[Callable[[str], str]] = None) -> Dict[str, str]:
        """Map each position value to its display label, e.g. for a select box.

        Args:
            translate: Optional localization function receiving `translation_key` and returning
                the label. Without it, the raw value is used as the label.

        Returns:
            Dict of `value -> label` in declaration order.
        """
        options = {}
        for position in cls:
            options[position.value] = translate(position.translation_key) if translate is not None else position.value
        return options
