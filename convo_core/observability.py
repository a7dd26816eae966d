"""
OBSERVABILITY
=============

Tracing plumbing for convo_core.

Provides contextvars-based access to the current tracing task object
anywhere in the call stack, without threading it through every function
signature. The task is duck-typed: anything with an
``event(name, payload=...)`` method works (e.g. a HiveLoop task).

Usage::

    from convo_core.observability import set_current_task

    set_current_task(task)
    manager.manage(messages, "show me ticket 10119")
"""

import contextvars
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Current tracing task for this execution context.
_current_task: contextvars.ContextVar[Optional[Any]] = contextvars.ContextVar(
    "convo_core_task", default=None
)


def set_current_task(task: Any) -> None:
    """Set the tracing task for the current execution context."""
    _current_task.set(task)


def get_current_task() -> Optional[Any]:
    """Get the current tracing task, or None if not in a tracked context."""
    return _current_task.get()


def clear_current_task() -> None:
    """Clear the current tracing task."""
    _current_task.set(None)


def report_event(name: str, payload: Dict[str, Any]) -> None:
    """Send an event to the current task, if any.

    Tracing never interrupts conversation management: a failing task
    is logged at DEBUG and otherwise ignored.
    """
    task = get_current_task()
    if task is None:
        return
    try:
        task.event(name, payload=payload)
    except Exception as e:
        logger.debug("Could not report event %s: %s", name, e)
