"""Scheduling strategies for ordering tasks.

Every strategy is a pure function from a list of tasks to a new, sorted
list. Python's sort is stable, so tasks that compare equal keep their
relative input order.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Callable, Iterable, Optional

from models import Task, now as current_time


class Strategy(StrEnum):
    SPT = "spt"
    EDF = "edf"
    WSPT = "wspt"
    FCFS = "fcfs"
    HPF = "hpf"
    CR = "cr"


@dataclass(frozen=True)
class StrategyInfo:
    name: str
    description: str
    best_for: tuple[str, ...]
    limitations: tuple[str, ...]
    icon: str


def shortest_processing_time(tasks: Iterable[Task]) -> list[Task]:
    """Shortest duration first."""
    return sorted(tasks, key=lambda t: t.duration)


def earliest_deadline_first(tasks: Iterable[Task]) -> list[Task]:
    """Closest deadline first."""
    return sorted(tasks, key=lambda t: t.deadline)


def weighted_shortest_processing_time(tasks: Iterable[Task]) -> list[Task]:
    """Highest importance per minute first."""
    return sorted(tasks, key=lambda t: t.importance / t.duration, reverse=True)


def first_come_first_served(tasks: Iterable[Task]) -> list[Task]:
    """Oldest task first."""
    return sorted(tasks, key=lambda t: t.created_at)


def highest_priority_first(tasks: Iterable[Task]) -> list[Task]:
    """Most important first."""
    return sorted(tasks, key=lambda t: t.importance, reverse=True)


def critical_ratio(tasks: Iterable[Task], now: Optional[datetime] = None) -> list[Task]:
    """Smallest time-left / duration ratio first.

    Overdue tasks have a negative ratio, so the most overdue come first.
    Importance plays no part in the ratio.
    """
    reference = now or current_time()

    def ratio(task: Task) -> float:
        time_left_ms = (task.deadline - reference).total_seconds() * 1000
        return time_left_ms / (task.duration * 60 * 1000)

    return sorted(tasks, key=ratio)


_ORDERINGS: dict[Strategy, Callable[..., list[Task]]] = {
    Strategy.SPT: shortest_processing_time,
    Strategy.EDF: earliest_deadline_first,
    Strategy.WSPT: weighted_shortest_processing_time,
    Strategy.FCFS: first_come_first_served,
    Strategy.HPF: highest_priority_first,
    Strategy.CR: critical_ratio,
}


STRATEGY_INFO: dict[Strategy, StrategyInfo] = {
    Strategy.SPT: StrategyInfo(
        name="Shortest Processing Time",
        description="Sort tasks from shortest to longest duration",
        best_for=(
            "Maximizing the number of completed tasks",
            "When all tasks have similar importance",
            "When you want to build momentum with quick wins",
        ),
        limitations=(
            "Important tasks might be delayed if they take longer",
            "Doesn't consider deadlines",
        ),
        icon="⏱",
    ),
    Strategy.EDF: StrategyInfo(
        name="Earliest Deadline First",
        description="Prioritize tasks with the closest deadlines",
        best_for=(
            "Meeting important deadlines",
            "Time-sensitive projects",
            "When late tasks have significant consequences",
        ),
        limitations=(
            "Short tasks might be delayed despite being quick wins",
            "Doesn't consider importance directly",
        ),
        icon="📅",
    ),
    Strategy.WSPT: StrategyInfo(
        name="Weighted Shortest Job First",
        description="Balance duration with importance for optimal value delivery",
        best_for=(
            "Balancing efficiency with importance",
            "Maximizing value per time spent",
            "Mixed priority environments",
        ),
        limitations=(
            "Complexity in calculating the perfect weight between factors",
            "May not respect hard deadlines",
        ),
        icon="⚖",
    ),
    Strategy.FCFS: StrategyInfo(
        name="First Come First Served",
        description="Complete tasks in the order they were added",
        best_for=(
            "Sequential dependencies",
            "When fairness in order is important",
            "Simple workflows",
        ),
        limitations=(
            "No optimization for importance or urgency",
            "Can be inefficient for time management",
        ),
        icon="☰",
    ),
    Strategy.HPF: StrategyInfo(
        name="Highest Priority First",
        description="Tackle the most important tasks first",
        best_for=(
            "When task importance varies significantly",
            "High-value deliverables",
            "Strategic prioritization",
        ),
        limitations=(
            "May ignore quick wins",
            "Doesn't consider deadlines directly",
        ),
        icon="↑",
    ),
    Strategy.CR: StrategyInfo(
        name="Critical Ratio",
        description="Balance deadline proximity with processing time",
        best_for=(
            "Complex project management",
            "Balancing deadline and duration",
            "Managing time-sensitive workloads",
        ),
        limitations=(
            "More complex to understand",
            "Requires accurate duration estimates",
        ),
        icon="⏳",
    ),
}

_missing = (set(Strategy) - _ORDERINGS.keys()) | (set(Strategy) - STRATEGY_INFO.keys())
if _missing:
    raise RuntimeError(f"Strategies without an ordering or description: {sorted(_missing)}")


def order_tasks(
    strategy: Strategy,
    tasks: Iterable[Task],
    now: Optional[datetime] = None,
) -> list[Task]:
    """Order tasks by a single strategy."""
    strategy = Strategy(strategy)
    if strategy is Strategy.CR:
        return critical_ratio(tasks, now)
    return _ORDERINGS[strategy](tasks)


def apply_strategy(
    strategy: Strategy,
    tasks: Iterable[Task],
    now: Optional[datetime] = None,
) -> list[Task]:
    """Order the incomplete tasks by ``strategy``, then the completed ones.

    Completed tasks keep their relative order at the tail.
    """
    tasks = list(tasks)
    incomplete = [t for t in tasks if not t.completed]
    completed = [t for t in tasks if t.completed]
    return order_tasks(strategy, incomplete, now) + completed
