"""Helpers shared by the task definition classes."""

from __future__ import annotations

from collections.abc import Callable

from invoke.tasks import Task

TaskBody = Callable[..., None]


def define_task(
    body: TaskBody,
    name: str,
    description: str,
    pre: list[Task[TaskBody]] | None = None,
) -> Task[TaskBody]:
    """
    Wrap a closure as an invoke task.

    Args:
        body: Function taking the invoke Context, then any task flags
        name: Task name inside its collection
        description: Help text shown by ``invoke --list``
        pre: Tasks that must run first
    """
    body.__doc__ = description
    return Task(body, name=name, pre=pre or [])
