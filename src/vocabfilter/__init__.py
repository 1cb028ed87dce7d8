"""Observable vocab-list filter with coalesced change notification."""

__version__ = "0.1.0"

from vocabfilter.actions import Action, ActionResult
from vocabfilter.controller import FilterController
from vocabfilter.messages import FieldChanged, FilterChanged
from vocabfilter.models import Category, FilterCriteria
from vocabfilter.state import FilterState

__all__ = [
    "Action",
    "ActionResult",
    "Category",
    "FieldChanged",
    "FilterChanged",
    "FilterController",
    "FilterCriteria",
    "FilterState",
    "__version__",
]
