# pycapsim/engine/history.py

"""
Per-step capacity history owned by one capacity engine.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import pandas as pd

from ..constants import SENTINEL_STEP
from ..utilities import truncate_to_2_decimals


def _seeded() -> List[float]:
    return [0.0]


@dataclass
class CapacityHistory:
    """
    Base and adjusted capacities indexed by time step.

    Both sequences are seeded with a 0.0 sentinel at step 0, so step 1 is the
    first simulated step. ``adjusted[t]`` is the total adjusted capacity of all
    subscriptions served in step ``t``; a step with a base draw but no usage
    holds 0.0 once a later step is recorded.

    Attributes
    ----------
    base : list of float
        Base capacity per step.
    adjusted : list of float
        Total adjusted capacity per step.
    records : list of dict
        One entry per served subscription: step, subscription, base, adjusted.
    """
    base: List[float] = field(default_factory=_seeded)
    adjusted: List[float] = field(default_factory=_seeded)
    records: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def last_step(self) -> int:
        """Last step with a base capacity."""
        return len(self.base) - 1

    @property
    def open_step(self) -> int:
        """Earliest step that can still record adjusted capacity."""
        return max(SENTINEL_STEP + 1, len(self.adjusted) - 1)

    def is_aligned(self) -> bool:
        return len(self.base) == len(self.adjusted)

    def record_base(self, step: int, value: float) -> None:
        if step != len(self.base):
            raise ValueError(f"Base capacity for step {step} out of order, expected step {len(self.base)}")
        self.base.append(value)

    def record_adjusted(self, step: int, value: float, subscription: str = "") -> None:
        """
        Add a subscription's adjusted capacity to a step.

        Raises
        ------
        ValueError
            If the step has no base capacity or is already closed.
        """
        if step > self.last_step:
            raise ValueError(f"No base capacity recorded for step {step}")
        if step < self.open_step:
            raise ValueError(f"Step {step} is closed, open step is {self.open_step}")
        while len(self.adjusted) < step:
            self.adjusted.append(0.0)
        if len(self.adjusted) == step:
            self.adjusted.append(value)
        else:
            self.adjusted[step] = truncate_to_2_decimals(self.adjusted[step] + value)
        self.records.append({
            "STEP": step, "SUBSCRIPTION": subscription,
            "BASE": self.base[step], "ADJUSTED": value,
        })

    def to_frame(self) -> pd.DataFrame:
        """Served subscriptions as a DataFrame with STEP, SUBSCRIPTION, BASE, ADJUSTED columns."""
        return pd.DataFrame(self.records, columns=["STEP", "SUBSCRIPTION", "BASE", "ADJUSTED"])

    def steps_frame(self) -> pd.DataFrame:
        """
        Per-step base and total adjusted capacity, sentinel excluded.

        Steps drawn but not yet served show an adjusted capacity of 0.0.
        """
        steps = range(SENTINEL_STEP + 1, len(self.base))
        adjusted = self.adjusted + [0.0] * (len(self.base) - len(self.adjusted))
        return pd.DataFrame({
            "STEP": list(steps),
            "BASE": self.base[1:],
            "ADJUSTED": adjusted[1:len(self.base)],
        })
