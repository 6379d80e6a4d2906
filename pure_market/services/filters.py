"""Text and material filters for table rows."""

from dataclasses import dataclass, field
from typing import Iterable, Protocol, TypeVar


class Filterable(Protocol):
    name: str
    material: str


Row = TypeVar("Row", bound=Filterable)


@dataclass(frozen=True)
class MaterialSelection:
    """Immutable set of selected materials. Empty means no material filter."""

    materials: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, materials: Iterable[str]) -> "MaterialSelection":
        return cls(frozenset(materials))

    def toggle(self, material: str) -> "MaterialSelection":
        if material in self.materials:
            return MaterialSelection(self.materials - {material})
        return MaterialSelection(self.materials | {material})

    def clear(self) -> "MaterialSelection":
        return MaterialSelection()

    def __contains__(self, material: str) -> bool:
        return material in self.materials

    def __len__(self) -> int:
        return len(self.materials)


def matches_query(row: Filterable, query: str) -> bool:
    """Case-insensitive substring match on the product name."""
    if not query:
        return True
    return query.lower() in row.name.lower()


def matches_materials(row: Filterable, materials: MaterialSelection | frozenset[str] | set[str]) -> bool:
    # Exact, case-sensitive membership
    if len(materials) == 0:
        return True
    return row.material in materials


def filter_rows(
    rows: Iterable[Row],
    query: str = "",
    materials: MaterialSelection | frozenset[str] | set[str] = frozenset(),
) -> list[Row]:
    """Rows matching both the name query and the material selection, in input order."""
    return [
        row for row in rows
        if matches_query(row, query) and matches_materials(row, materials)
    ]


def unique_materials(rows: Iterable[Filterable]) -> list[str]:
    return sorted({row.material for row in rows})
