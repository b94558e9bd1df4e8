"""Core, UI-agnostic models and commands for histpick."""

from .candidates import CandidateSource, make_candidate_source
from .commands import INSERT_ITEM_COMMAND, insert_item
from .context import REPEAT_COMPLEX_COMMAND, ContextKind, EditingContext
from .document import DocumentWrapper, StringDocument
from .exceptions import ConfigurationError, HistPickError
from .features import FeatureRegistry
from .history import CommandHistory, ComplexCommand, HistoryRing, HistoryStores
from .installer import setup_keybinding
from .keymap import Keymap, KeymapRegistry
from .resolver import resolve_history

__all__ = [
    "CandidateSource",
    "CommandHistory",
    "ComplexCommand",
    "ConfigurationError",
    "ContextKind",
    "DocumentWrapper",
    "EditingContext",
    "FeatureRegistry",
    "HistPickError",
    "HistoryRing",
    "HistoryStores",
    "INSERT_ITEM_COMMAND",
    "Keymap",
    "KeymapRegistry",
    "REPEAT_COMPLEX_COMMAND",
    "StringDocument",
    "insert_item",
    "make_candidate_source",
    "resolve_history",
    "setup_keybinding",
]
