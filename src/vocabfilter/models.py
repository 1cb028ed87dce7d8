"""Filter value objects: categories and the criteria set they belong to."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace

from vocabfilter.constants import NO_LEVEL


@dataclass(eq=False)
class Category:
    """A vocab category supplied by the category source.

    Categories are opaque tokens compared by identity: two instances with
    the same id are still different categories as far as the filter is
    concerned.
    """

    id: int
    label: str
    short_name: str = ""

    def __repr__(self) -> str:
        return f"Category(id={self.id!r}, label={self.label!r})"


@dataclass
class FilterCriteria:
    """One complete filter configuration for a vocab list view.

    Empty strings, ``None`` and ``NO_LEVEL`` mean "no constraint" for their
    respective fields. The two ordering flags are always in effect.
    """

    reading_text: str = ""
    meaning_text: str = ""
    category: Category | None = None
    jlpt_level: int = NO_LEVEL
    wk_level: int = NO_LEVEL
    common_first: bool = False
    short_reading_first: bool = False

    def copy(self) -> FilterCriteria:
        """Return an independent copy (categories are shared tokens)."""
        return replace(self)

    def diff(self, other: FilterCriteria) -> tuple[str, ...]:
        """Return the names of fields whose values differ from *other*."""
        return tuple(
            name
            for name in FILTER_FIELDS
            if getattr(self, name) != getattr(other, name)
        )

    def to_filter_strings(self) -> list[str]:
        """Convert active constraints and ordering flags to 'field:value' strings."""
        filters: list[str] = []
        if self.reading_text:
            filters.append(f"reading:{self.reading_text}")
        if self.meaning_text:
            filters.append(f"meaning:{self.meaning_text}")
        if self.category is not None:
            filters.append(f"category:{self.category.label}")
        if self.jlpt_level != NO_LEVEL:
            filters.append(f"jlpt:{self.jlpt_level}")
        if self.wk_level != NO_LEVEL:
            filters.append(f"wk:{self.wk_level}")
        if self.common_first:
            filters.append("order:common_first")
        if self.short_reading_first:
            filters.append("order:short_reading_first")
        return filters

    def is_empty(self) -> bool:
        """Return True if no constraint field is active."""
        return (
            not self.reading_text
            and not self.meaning_text
            and self.category is None
            and self.jlpt_level == NO_LEVEL
            and self.wk_level == NO_LEVEL
        )


FILTER_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(FilterCriteria))
