"""
Selection — NoSelection / Selected(id) state machine following the store.
"""
from portfolio.selection.coordinator import SelectionCoordinator, SelectionState

__all__ = ["SelectionCoordinator", "SelectionState"]
