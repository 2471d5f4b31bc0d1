# pycapsim/exceptions.py

"""
Error taxonomy for capacity computation.

None of these errors are recovered inside the package: a simulated market is
only reproducible when every capacity follows from configuration plus the
random seed, so failures propagate to the caller.
"""

from typing import Optional


class CapacityError(Exception):
    """
    Base class for capacity pipeline failures.

    Parameters
    ----------
    message : str
        Description of the failure.
    customer : str, optional
        Name of the customer the failing computation belongs to.
    step : int, optional
        Time step being computed when the failure happened.
    """

    def __init__(self, message: str, customer: Optional[str] = None,
                 step: Optional[int] = None):
        self.message = message
        self.customer = customer
        self.step = step
        super().__init__(self._format())

    def _format(self) -> str:
        context = []
        if self.customer:
            context.append(f"customer={self.customer}")
        if self.step is not None:
            context.append(f"step={self.step}")
        if context:
            return f"{self.message} ({', '.join(context)})"
        return self.message

    def with_context(self, customer: Optional[str] = None,
                     step: Optional[int] = None) -> "CapacityError":
        """Fill in missing customer and step context and return self."""
        if self.customer is None:
            self.customer = customer
        if self.step is None:
            self.step = step
        self.args = (self._format(),)
        return self


class ConfigurationError(CapacityError):
    """Raised for unknown kinds, malformed parameters or invalid profile fields."""
    pass


class OutOfRange(CapacityError):
    """Raised when a time series is asked for a step beyond its data."""
    pass


class InvalidValue(CapacityError):
    """Raised when a computed capacity is not a finite number."""
    pass


class MissingTableEntry(CapacityError):
    """Raised when a weather lookup key is absent from its table."""

    def __init__(self, table: str, key, customer: Optional[str] = None,
                 step: Optional[int] = None):
        self.table = table
        self.key = key
        super().__init__(f"No entry for {key} in {table} table", customer, step)


class EngineHalted(CapacityError):
    """Raised on any call to an engine that already failed fatally."""
    pass
