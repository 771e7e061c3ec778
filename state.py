"""Application state shared by the whatToDoNow views."""

import logging
from datetime import datetime
from typing import Optional

from models import Task
from scheduling import Strategy, STRATEGY_INFO, apply_strategy
from storage import TaskStore

logger = logging.getLogger(__name__)


class BoardState:
    """Owns the task store plus the transient display order.

    ``tasks`` is the canonical insertion order kept by the store.
    ``displayed`` is what the list shows; sorting only ever changes that.
    """

    def __init__(self, store: TaskStore):
        self.store = store
        self.selected: Optional[Strategy] = None
        self.displayed: list[Task] = store.tasks

    @property
    def tasks(self) -> list[Task]:
        return self.store.tasks

    @property
    def incomplete_count(self) -> int:
        return sum(1 for t in self.store.tasks if not t.completed)

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self.store.tasks if t.completed)

    @property
    def can_sort(self) -> bool:
        return self.incomplete_count > 0

    def load(self) -> list[Task]:
        """Rehydrate from storage and show the stored order."""
        self.store.load()
        self.reset_order()
        return self.displayed

    def add_task(self, task: Task) -> list[Task]:
        """Store a new task; any active sort is dropped."""
        self.store.add(task)
        self.selected = None
        self.displayed = self.store.tasks
        return self.displayed

    def set_completed(self, task_id: str, completed: bool, now: Optional[datetime] = None) -> list[Task]:
        self.store.set_completed(task_id, completed)
        if self.selected is not None:
            self.displayed = apply_strategy(self.selected, self.store.tasks, now)
        else:
            self.displayed = self.store.tasks
        return self.displayed

    def select_strategy(self, strategy: Strategy, now: Optional[datetime] = None) -> bool:
        """Sort the display by ``strategy``.

        Returns False, leaving everything as it was, when there is nothing
        left to sort.
        """
        strategy = Strategy(strategy)
        if not self.can_sort:
            logger.debug("Ignoring %s: no incomplete tasks", strategy.value)
            return False
        self.displayed = apply_strategy(strategy, self.store.tasks, now)
        self.selected = strategy
        logger.info("Sorted %d tasks using %s", len(self.displayed), STRATEGY_INFO[strategy].name)
        return True

    def reset_order(self) -> None:
        self.displayed = self.store.tasks
        self.selected = None
