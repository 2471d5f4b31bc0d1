# pycapsim/sampling/timeseries.py

"""
Replay of a pre-loaded capacity time series, one value per time step.
"""

from typing import Sequence, Union

import numpy as np
import pandas as pd

from ..exceptions import ConfigurationError, OutOfRange


class TimeSeriesSampler:
    """
    Replays historical or synthetic base capacities.

    Step 1 is the first simulated step and maps to the first loaded value;
    step 0 is the history sentinel and is never sampled.

    Parameters
    ----------
    values : sequence of float, np.ndarray or pd.Series
        Values in step order.
    name : str, optional
        Series name used in error messages.
    """

    def __init__(self, values: Union[Sequence[float], np.ndarray, pd.Series], name: str = ""):
        try:
            data = np.asarray(values, dtype=float)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Time series '{name}' has non-numeric values: {e}") from e
        if data.ndim != 1:
            raise ConfigurationError(f"Time series '{name}' must be one-dimensional")
        data.setflags(write=False)
        self.values = data
        self.name = name

    @classmethod
    def from_csv(cls, path: str, column: str = "VALUE", name: str = "") -> "TimeSeriesSampler":
        """Load a series from one column of a CSV file."""
        df = pd.read_csv(path)
        if column not in df.columns:
            raise ConfigurationError(
                f"Time series file {path} has no column '{column}'. Found: {list(df.columns)}"
            )
        return cls(df[column], name=name or column)

    def __len__(self) -> int:
        return len(self.values)

    def sample(self, step: int) -> float:
        """
        Return the value for a time step.

        Raises
        ------
        ValueError
            If step is below 1.
        OutOfRange
            If step runs past the loaded data.
        """
        if step < 1:
            raise ValueError(f"Time series steps start at 1, got {step}")
        if step > len(self.values):
            raise OutOfRange(
                f"Time series '{self.name}' has {len(self.values)} values, "
                f"no value for step {step}",
                step=step,
            )
        return float(self.values[step - 1])
