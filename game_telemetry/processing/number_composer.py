"""Merging adjacent single-digit readings into unit levels."""

import logging
from typing import List, Sequence

from ..core.models import DigitReading, NumericReading

logger = logging.getLogger(__name__)


class NumberComposer:
    """Pairs digits of the same level icon.

    On the level icon the right-hand digit is the tens digit. Pairing is greedy in
    detection order and a digit used in a valid pair is not paired again.
    """

    def __init__(self, max_dy: int = 3, min_dx: int = 8, max_dx: int = 15, max_value: int = 15):
        self.max_dy = max_dy
        self.min_dx = min_dx
        self.max_dx = max_dx
        self.max_value = max_value

    def compose(self, readings: Sequence[DigitReading]) -> List[NumericReading]:
        paired = [False] * len(readings)
        composed: List[NumericReading] = []

        for i, first in enumerate(readings):
            if paired[i]:
                continue

            for j in range(i + 1, len(readings)):
                if paired[j]:
                    continue
                pair = self._pair(first, readings[j])
                if pair is not None:
                    composed.append(pair)
                    paired[i] = paired[j] = True
                    break

            if not paired[i] and first.digit > 0:
                composed.append(NumericReading(position=first.position, value=first.digit, digit_count=1))

        return composed

    def is_adjacent(self, a: DigitReading, b: DigitReading) -> bool:
        dx = abs(a.position[0] - b.position[0])
        dy = abs(a.position[1] - b.position[1])
        return dy < self.max_dy and self.min_dx < dx < self.max_dx

    def _pair(self, a: DigitReading, b: DigitReading):
        if not self.is_adjacent(a, b):
            return None

        right, left = (a, b) if a.position[0] > b.position[0] else (b, a)
        value = right.digit * 10 + left.digit
        if not 10 <= value <= self.max_value:
            logger.debug(f"Rejected two-digit level {value} at {right.position}")
            return None

        return NumericReading(position=right.position, value=value, digit_count=2)
