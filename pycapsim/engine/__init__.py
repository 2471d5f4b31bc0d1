# pycapsim/engine/__init__.py

from .engine import CapacityEngine
from .history import CapacityHistory

__all__ = ['CapacityEngine', 'CapacityHistory']
