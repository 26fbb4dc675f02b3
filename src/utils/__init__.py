"""
Utility functions for the spring animation system
"""

from .parsing import normalize_key, parse_number, split_list
from .enum_helper import EnumHelper

__all__ = [
    'normalize_key',
    'parse_number',
    'split_list',
    'EnumHelper',
]
