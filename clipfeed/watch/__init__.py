"""Change watching and debounced regeneration."""

from clipfeed.watch.debounce import DebounceCoordinator, DebounceState
from clipfeed.watch.watcher import ChangeEvent, ChangeOp, ChangeWatcher, is_qualifying

__all__ = [
    "ChangeEvent",
    "ChangeOp",
    "ChangeWatcher",
    "DebounceCoordinator",
    "DebounceState",
    "is_qualifying",
]
