"""
Axis-aligned rectangle primitives used for block outlines and grid bins.
"""


class Rect:
    """
    Axis-aligned rectangle given by lower-left and upper-right corners.

    Attributes:
        ll_x, ll_y: Lower-left corner
        ur_x, ur_y: Upper-right corner
    """

    __slots__ = ('ll_x', 'll_y', 'ur_x', 'ur_y')

    def __init__(self, ll_x: float = 0.0, ll_y: float = 0.0,
                 ur_x: float = 0.0, ur_y: float = 0.0):
        self.ll_x = ll_x
        self.ll_y = ll_y
        self.ur_x = ur_x
        self.ur_y = ur_y

    @classmethod
    def from_origin_and_size(cls, x: float, y: float,
                             width: float, height: float) -> 'Rect':
        """Build a rectangle from its lower-left corner and extent."""
        return cls(x, y, x + width, y + height)

    @property
    def width(self) -> float:
        return self.ur_x - self.ll_x

    @property
    def height(self) -> float:
        return self.ur_y - self.ll_y

    @property
    def area(self) -> float:
        return self.width * self.height

    def copy(self) -> 'Rect':
        return Rect(self.ll_x, self.ll_y, self.ur_x, self.ur_y)

    def intersects(self, other: 'Rect') -> bool:
        """True if both rectangles share a region of non-zero area."""
        return (
            self.ll_x < other.ur_x and other.ll_x < self.ur_x
            and self.ll_y < other.ur_y and other.ll_y < self.ur_y
        )

    @staticmethod
    def determine_intersection(a: 'Rect', b: 'Rect') -> 'Rect':
        """
        Overlapping region of two rectangles.

        Args:
            a: First rectangle
            b: Second rectangle

        Returns:
            Intersection rectangle; an empty rectangle (area 0) if disjoint
        """
        if not a.intersects(b):
            return Rect()

        return Rect(
            max(a.ll_x, b.ll_x),
            max(a.ll_y, b.ll_y),
            min(a.ur_x, b.ur_x),
            min(a.ur_y, b.ur_y),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Rect):
            return NotImplemented
        return (
            self.ll_x == other.ll_x and self.ll_y == other.ll_y
            and self.ur_x == other.ur_x and self.ur_y == other.ur_y
        )

    def __repr__(self) -> str:
        return (
            f"Rect(ll=({self.ll_x}, {self.ll_y}), "
            f"ur=({self.ur_x}, {self.ur_y}))"
        )
