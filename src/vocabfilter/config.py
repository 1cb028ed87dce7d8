"""Configuration loading for the filter defaults and category list."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from vocabfilter.constants import CONFIG_ENV_VAR, NO_LEVEL
from vocabfilter.models import Category, FilterCriteria


@dataclass
class FilterConfig:
    """Initial criteria for a new list view plus the categories it offers."""

    reading_text: str = ""
    meaning_text: str = ""
    jlpt_level: int = NO_LEVEL
    wk_level: int = NO_LEVEL
    common_first: bool = False
    short_reading_first: bool = False
    categories: list[Category] = field(default_factory=list)
    default_category_id: int | None = None
    log_dir: Path = field(default_factory=lambda: Path("logs"))

    def __post_init__(self) -> None:
        """Ensure log_dir is a Path object."""
        if isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)

    def find_category(self, category_id: int | None) -> Category | None:
        """Return the configured category with *category_id*, if any."""
        if category_id is None:
            return None
        return next((c for c in self.categories if c.id == category_id), None)

    def to_criteria(self) -> FilterCriteria:
        """Build the FilterCriteria a new list view starts from."""
        return FilterCriteria(
            reading_text=self.reading_text,
            meaning_text=self.meaning_text,
            category=self.find_category(self.default_category_id),
            jlpt_level=self.jlpt_level,
            wk_level=self.wk_level,
            common_first=self.common_first,
            short_reading_first=self.short_reading_first,
        )


def _parse_category(entry: dict) -> Category:
    if "id" not in entry or "label" not in entry:
        raise ValueError(f"Category entry needs 'id' and 'label': {entry!r}")
    return Category(
        id=int(entry["id"]),
        label=str(entry["label"]),
        short_name=str(entry.get("short_name", "")),
    )


def load_config(config_path: Path) -> FilterConfig:
    """Load filter configuration from JSON, merging with defaults.

    Args:
        config_path: Path to a JSON file. Recognised keys mirror the
            FilterConfig attributes; ``categories`` is a list of
            ``{"id", "label", "short_name"}`` objects.

    Returns:
        FilterConfig with values from file merged over defaults.

    Raises:
        ValueError: If a category entry lacks ``id`` or ``label``.
    """
    with open(config_path, encoding="utf-8") as f:
        data = json.load(f)

    kwargs: dict[str, object] = {}

    for key in ("reading_text", "meaning_text"):
        if key in data:
            kwargs[key] = str(data[key])

    for key in ("jlpt_level", "wk_level"):
        if key in data:
            kwargs[key] = int(data[key])

    for key in ("common_first", "short_reading_first"):
        if key in data:
            kwargs[key] = bool(data[key])

    if "categories" in data:
        kwargs["categories"] = [_parse_category(c) for c in data["categories"]]

    if data.get("default_category_id") is not None:
        kwargs["default_category_id"] = int(data["default_category_id"])

    if "log_dir" in data:
        kwargs["log_dir"] = Path(data["log_dir"])

    return FilterConfig(**kwargs)  # type: ignore[arg-type]


def resolve_config(config_path: Path | None = None) -> FilterConfig:
    """Load *config_path*, else the file named by VOCABFILTER_CONFIG, else defaults."""
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            config_path = Path(env_path)
    if config_path is None:
        return FilterConfig()
    return load_config(config_path)
