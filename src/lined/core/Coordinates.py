# lined/core/Coordinates.py
"""lined.core.Coordinates
=========================

Integer grid coordinates and the four cardinal directions.

`Coordinates` is an immutable (x, y) pair. Besides plain arithmetic it offers
three families of step operations that the navigation engine relies on:

- unchecked steps (`up`, `down_by`, ...) that may produce negative axes;
- checked steps (`try_up`, `try_left_by`, ...) that return ``None`` when an
  axis would drop below zero;
- bounded steps (`try_bounded_down_by`, ...) that return ``None`` when the
  stepped axis leaves a caller-supplied ``range``.

Saturating steps clamp an axis at zero instead of failing.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional


class Coordinates(NamedTuple):
    """An immutable (x, y) pair; x is the column axis, y the row axis."""

    x: int = 0
    y: int = 0

    @classmethod
    def origin(cls) -> "Coordinates":
        return cls(0, 0)

    def __add__(self, other: "Coordinates") -> "Coordinates":  # type: ignore[override]
        return Coordinates(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Coordinates") -> "Coordinates":
        return Coordinates(self.x - other.x, self.y - other.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    # --- unchecked steps ---
    def up_by(self, steps: int) -> "Coordinates":
        return Coordinates(self.x, self.y - steps)

    def down_by(self, steps: int) -> "Coordinates":
        return Coordinates(self.x, self.y + steps)

    def left_by(self, steps: int) -> "Coordinates":
        return Coordinates(self.x - steps, self.y)

    def right_by(self, steps: int) -> "Coordinates":
        return Coordinates(self.x + steps, self.y)

    def up(self) -> "Coordinates":
        return self.up_by(1)

    def down(self) -> "Coordinates":
        return self.down_by(1)

    def left(self) -> "Coordinates":
        return self.left_by(1)

    def right(self) -> "Coordinates":
        return self.right_by(1)

    def step(self, direction: "Direction", steps: int = 1) -> "Coordinates":
        dx, dy = direction.as_vector()
        return Coordinates(self.x + dx * steps, self.y + dy * steps)

    # --- checked steps (axes never go negative) ---
    def try_up_by(self, steps: int) -> Optional["Coordinates"]:
        if self.y - steps < 0:
            return None
        return self.up_by(steps)

    def try_down_by(self, steps: int) -> Optional["Coordinates"]:
        if self.y + steps < 0:
            return None
        return self.down_by(steps)

    def try_left_by(self, steps: int) -> Optional["Coordinates"]:
        if self.x - steps < 0:
            return None
        return self.left_by(steps)

    def try_right_by(self, steps: int) -> Optional["Coordinates"]:
        if self.x + steps < 0:
            return None
        return self.right_by(steps)

    def try_up(self) -> Optional["Coordinates"]:
        return self.try_up_by(1)

    def try_down(self) -> Optional["Coordinates"]:
        return self.try_down_by(1)

    def try_left(self) -> Optional["Coordinates"]:
        return self.try_left_by(1)

    def try_right(self) -> Optional["Coordinates"]:
        return self.try_right_by(1)

    # --- bounded steps ---
    def try_bounded_up_by(self, steps: int, y_range: range) -> Optional["Coordinates"]:
        """Step up, or ``None`` if the new y is not inside ``y_range``.

        >>> Coordinates(0, 1).try_bounded_up_by(1, range(0, 5))
        Coordinates(x=0, y=0)
        >>> Coordinates(0, 0).try_bounded_up_by(1, range(0, 5)) is None
        True
        """
        candidate = self.up_by(steps)
        return candidate if candidate.y in y_range else None

    def try_bounded_down_by(self, steps: int, y_range: range) -> Optional["Coordinates"]:
        candidate = self.down_by(steps)
        return candidate if candidate.y in y_range else None

    def try_bounded_left_by(self, steps: int, x_range: range) -> Optional["Coordinates"]:
        candidate = self.left_by(steps)
        return candidate if candidate.x in x_range else None

    def try_bounded_right_by(self, steps: int, x_range: range) -> Optional["Coordinates"]:
        candidate = self.right_by(steps)
        return candidate if candidate.x in x_range else None

    # --- saturating steps ---
    def saturating_up_by(self, steps: int) -> "Coordinates":
        return Coordinates(self.x, max(0, self.y - steps))

    def saturating_left_by(self, steps: int) -> "Coordinates":
        return Coordinates(max(0, self.x - steps), self.y)

    def clamp(self, x_range: range, y_range: range) -> "Coordinates":
        """Clamp both axes into the given (non-empty) ranges."""
        x = min(max(self.x, x_range.start), x_range.stop - 1)
        y = min(max(self.y, y_range.start), y_range.stop - 1)
        return Coordinates(x, y)


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    def reverse(self) -> "Direction":
        return _REVERSED[self]

    def as_vector(self) -> Coordinates:
        return _VECTORS[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)

    def __str__(self) -> str:
        return self.value


_REVERSED = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_VECTORS = {
    Direction.UP: Coordinates(0, -1),
    Direction.DOWN: Coordinates(0, 1),
    Direction.LEFT: Coordinates(-1, 0),
    Direction.RIGHT: Coordinates(1, 0),
}
