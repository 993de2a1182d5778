"""Built-in deep-sky catalog and text search."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import asdict, dataclass

from astroportal.errors import ObjectNotFoundError


@dataclass(frozen=True)
class CelestialObject:
    """A catalog entry. ``ra``/``dec`` are sexagesimal strings."""

    id: str  # Short code ("M31")
    name: str
    ra: str  # "HHh MMm SSs"
    dec: str  # "±DD° MM′ SS″"
    magnitude: float
    type: str  # Category label ("Spiral Galaxy")
    fov: str  # Display string for the framing

    def to_dict(self) -> dict:
        return asdict(self)


CATALOG: tuple[CelestialObject, ...] = (
    CelestialObject("M31", "M31 - Andromeda Galaxy", "00h 42m 44s", "+41° 16′ 09″", 3.4, "Spiral Galaxy", "1.2° × 0.8°"),
    CelestialObject("M42", "M42 - Orion Nebula", "05h 35m 17s", "-05° 23′ 28″", 4.0, "Emission Nebula", "1.0° × 0.7°"),
    CelestialObject("M45", "M45 - Pleiades", "03h 47m 24s", "+24° 07′ 00″", 1.6, "Open Cluster", "2.0° × 1.5°"),
    CelestialObject("M13", "M13 - Hercules Cluster", "16h 41m 41s", "+36° 27′ 37″", 5.8, "Globular Cluster", "0.5° × 0.5°"),
)


class CatalogStore:
    """Read-only view over an ordered collection of catalog entries."""

    def __init__(self, objects: Iterable[CelestialObject] = CATALOG) -> None:
        self._objects = tuple(objects)

    def __iter__(self) -> Iterator[CelestialObject]:
        return iter(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def all(self) -> tuple[CelestialObject, ...]:
        return self._objects

    def first(self) -> CelestialObject:
        return self._objects[0]

    def search(self, query: str | None) -> list[CelestialObject]:
        """Entries whose id, name or type contains ``query``, ignoring case.

        A blank query returns the whole catalog.
        """
        q = (query or "").strip().lower()
        if not q:
            return list(self._objects)
        return [
            o
            for o in self._objects
            if q in o.id.lower() or q in o.name.lower() or q in o.type.lower()
        ]

    def get(self, object_id: str) -> CelestialObject:
        """Exact id lookup. Raises ObjectNotFoundError for unknown ids."""
        for o in self._objects:
            if o.id == object_id:
                return o
        raise ObjectNotFoundError(object_id)
