# pycapsim/profile/__init__.py

from .structures import (
    BaseCapacityKind,
    BaseCapacitySpec,
    CapacityBundle,
    CapacityProfile,
    CustomerProfile,
    parse_base_capacity_kind,
)
from .loader import load_profile, profile_from_dict

__all__ = [
    'BaseCapacityKind',
    'BaseCapacitySpec',
    'CapacityBundle',
    'CapacityProfile',
    'CustomerProfile',
    'parse_base_capacity_kind',
    'load_profile',
    'profile_from_dict',
]
