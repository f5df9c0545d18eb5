"""Geographic primitives: positions, extents and tile coordinates.

All angles are radians.  ``from_degrees`` constructors exist for the
places where degrees enter the system (descriptor bounding boxes and
caller convenience).

Extents are frozen; clamping returns a new ``Extent`` rather than
mutating the caller's value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Cartographic:
    """A position on the ellipsoid.

    Attributes:
        longitude: Longitude in radians.
        latitude: Latitude in radians.
        height: Height above the ellipsoid in metres.
    """

    longitude: float
    latitude: float
    height: float = 0.0

    @classmethod
    def from_degrees(cls, longitude: float, latitude: float, height: float = 0.0) -> Cartographic:
        """Build a position from angles in degrees."""
        return cls(math.radians(longitude), math.radians(latitude), height)


@dataclass(frozen=True, slots=True)
class TileXY:
    """Column/row coordinate of a tile at some level."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class Extent:
    """Axis-aligned geographic bounding box in radians.

    Attributes:
        west: Westernmost longitude.
        south: Southernmost latitude.
        east: Easternmost longitude.
        north: Northernmost latitude.
    """

    west: float
    south: float
    east: float
    north: float

    @classmethod
    def from_degrees(cls, west: float, south: float, east: float, north: float) -> Extent:
        """Build an extent from edges given in degrees."""
        return cls(
            math.radians(west),
            math.radians(south),
            math.radians(east),
            math.radians(north),
        )

    @classmethod
    def from_corners(cls, southwest: Cartographic, northeast: Cartographic) -> Extent:
        """Build an extent spanning two corner positions."""
        return cls(southwest.longitude, southwest.latitude, northeast.longitude, northeast.latitude)

    @property
    def width(self) -> float:
        return self.east - self.west

    @property
    def height(self) -> float:
        return self.north - self.south

    @property
    def southwest(self) -> Cartographic:
        return Cartographic(self.west, self.south)

    @property
    def northeast(self) -> Cartographic:
        return Cartographic(self.east, self.north)

    def contains(self, position: Cartographic) -> bool:
        """Return ``True`` if *position* lies inside or on the edge of this extent."""
        return (
            self.west <= position.longitude <= self.east
            and self.south <= position.latitude <= self.north
        )

    def clone(self) -> Extent:
        return replace(self)

    def clamp_to(self, bounds: Extent) -> Extent:
        """Return a copy with each edge pulled inside *bounds*.

        The four edges are clamped independently; an edge already inside
        *bounds* is left untouched.
        """
        return Extent(
            west=max(self.west, bounds.west),
            south=max(self.south, bounds.south),
            east=min(self.east, bounds.east),
            north=min(self.north, bounds.north),
        )

    def to_degrees(self) -> tuple[float, float, float, float]:
        """Return ``(west, south, east, north)`` in degrees."""
        return (
            math.degrees(self.west),
            math.degrees(self.south),
            math.degrees(self.east),
            math.degrees(self.north),
        )


MAX_VALUE = Extent(-math.pi, -math.pi / 2, math.pi, math.pi / 2)
"""The whole globe."""
