"""Enum conversion utilities"""

from enum import Enum
from typing import TypeVar, Type, Optional, List

# Generic type for any Enum subclass
E = TypeVar("E", bound=Enum)

class EnumHelper:
    """
    Utility class for working with Enums in config and attribute text:
    - Parse strings back to enum members (case-insensitive, '-' == '_')
    - List member names for messages
    """

    @staticmethod
    def to_string(enum_value: E, lowercase: bool = False) -> str:
        """
        Convert Enum member to string (its name).

        Args:
            enum_value: Enum member
            lowercase: Return lowercase string (for config or attributes)
        """
        if not isinstance(enum_value, Enum):
            raise TypeError(f"Expected Enum, got {type(enum_value).__name__}")
        name = enum_value.name
        return name.lower() if lowercase else name

    @staticmethod
    def from_string(enum_class: Type[E], name: str, default: Optional[E] = None) -> Optional[E]:
        """
        Parse string to Enum member.

        Args:
            enum_class: Enum class to parse into
            name: Member name, e.g. "damped-cosine" or "DAMPED_COSINE"
            default: Return value if not found (None = raise)

        Raises:
            ValueError: If name matches no member and no default is given
        """
        if not issubclass(enum_class, Enum):
            raise TypeError(f"{enum_class} is not an Enum class")

        normalized = str(name).strip().upper().replace("-", "_")
        for member in enum_class:
            if member.name == normalized:
                return member

        if default is not None:
            return default
        raise ValueError(f"Invalid {enum_class.__name__} name: {name}")

    @staticmethod
    def list_names(enum_class: Type[E], lowercase: bool = False) -> List[str]:
        """List all Enum member names"""
        if not issubclass(enum_class, Enum):
            raise TypeError(f"{enum_class} is not an Enum class")

        if lowercase:
            return [member.name.lower() for member in enum_class]
        return [member.name for member in enum_class]
