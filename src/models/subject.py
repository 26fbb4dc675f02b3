"""
Animated subject contract and an in-memory implementation.

The core never touches a real document or compositor. Anything that can
report its geometry and rendered transform, and accept numeric property
writes, can be animated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class AnimatedSubject(Protocol):
    """What the session driver needs from an animated subject"""

    subject_id: str
    attributes: Dict[str, str]
    dataset: Dict[str, str]

    def is_attached(self) -> bool: ...

    def bounding_area(self) -> float: ...

    def transform_signature(self) -> Optional[str]: ...

    def read_property(self, name: str) -> float: ...

    def write_property(self, name: str, value: float) -> None: ...

    def set_transition(self, declaration: str) -> None: ...


@dataclass
class HeadlessSubject:
    """
    In-memory subject used by the demo entry point and tests.

    A write to 'transform' renders as translateY(<value>px), so the rendered
    transform signature follows the driver's own writes. resize(), move()
    and detach() simulate external actors.
    """

    subject_id: str
    width: float = 100.0
    height: float = 100.0
    attributes: Dict[str, str] = field(default_factory=dict)
    dataset: Dict[str, str] = field(default_factory=dict)
    values: Dict[str, float] = field(default_factory=dict)
    transform: Optional[str] = None
    transition: str = ""
    attached: bool = True
    writes: List[Tuple[str, float]] = field(default_factory=list)

    # --- AnimatedSubject ---

    def is_attached(self) -> bool:
        return self.attached

    def bounding_area(self) -> float:
        return self.width * self.height

    def transform_signature(self) -> Optional[str]:
        return self.transform

    def read_property(self, name: str) -> float:
        return self.values.get(name, 0.0)

    def write_property(self, name: str, value: float) -> None:
        self.values[name] = value
        self.writes.append((name, value))
        if name == "transform":
            self.transform = f"translateY({value}px)"

    def set_transition(self, declaration: str) -> None:
        self.transition = declaration

    # --- External actors ---

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def move(self, transform: str, value: Optional[float] = None) -> None:
        """Change the rendered transform without going through the driver"""
        self.transform = transform
        if value is not None:
            self.values["transform"] = value

    def detach(self) -> None:
        self.attached = False

    def last_written(self, name: str) -> Optional[float]:
        for prop, value in reversed(self.writes):
            if prop == name:
                return value
        return None
