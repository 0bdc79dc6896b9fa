"""Pure validation rules for daily report input."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from ..core.constants import HOURS_DECIMAL_PLACES, MAX_DAILY_HOURS, MAX_PROGRESS, MIN_PROGRESS
from ..core.enums import ErrorCode
from ..core.exceptions import DomainError, validation_error
from ..core.result import Either, left, right
from .model import Task


def total_hours(tasks: Sequence[Task]) -> float:
    return sum(t.hours_spent for t in tasks)


def _invalid_hours(message: str, **details) -> DomainError:
    return validation_error(message, code=ErrorCode.INVALID_TASK_HOURS, details=details or None)


def check_task_hours(tasks: Sequence[Task]) -> Optional[DomainError]:
    for index, task in enumerate(tasks):
        hours = task.hours_spent
        if not math.isfinite(hours):
            return _invalid_hours("Hours spent must be a finite number", taskIndex=index)
        if hours < 0:
            return _invalid_hours("Hours spent cannot be negative", taskIndex=index)
        # stored with two decimals; anything finer would be rounded on write
        if round(hours, HOURS_DECIMAL_PLACES) != hours:
            return _invalid_hours(
                f"Hours spent can have at most {HOURS_DECIMAL_PLACES} decimal places",
                taskIndex=index,
                hoursSpent=hours,
            )

    hours = round(total_hours(tasks), HOURS_DECIMAL_PLACES)
    if hours > MAX_DAILY_HOURS:
        return _invalid_hours(
            f"Total working hours cannot exceed {MAX_DAILY_HOURS} hours per day",
            totalHours=hours,
        )
    return None


def check_task_progress(tasks: Sequence[Task]) -> Optional[DomainError]:
    for index, task in enumerate(tasks):
        if not math.isfinite(task.progress) or not MIN_PROGRESS <= task.progress <= MAX_PROGRESS:
            return validation_error(
                f"Progress must be between {MIN_PROGRESS} and {MAX_PROGRESS}",
                code=ErrorCode.INVALID_PROGRESS_VALUE,
                details={"taskIndex": index, "progress": task.progress},
            )
    return None


def validate_tasks(tasks: Sequence[Task]) -> Either[DomainError, tuple[Task, ...]]:
    """Check a task list: non-empty, total hours within a day, progress in range."""
    if not tasks:
        return left(validation_error("At least one task is required"))

    error = check_task_hours(tasks) or check_task_progress(tasks)
    if error:
        return left(error)
    return right(tuple(tasks))


def validate_feedback(feedback: Optional[str]) -> Either[DomainError, str]:
    """Blank (or whitespace-only) feedback is refused; the text is kept as written."""
    if not feedback or not feedback.strip():
        return left(validation_error("Please enter a reason for rejecting the report"))
    return right(feedback)
