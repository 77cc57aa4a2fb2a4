"""Route Dependencies — workflows resolved from the composition root on app.state.

Invariants:
    - Workflows are built once in the lifespan (main.py); routes never construct them
    - Tests replace these via app.dependency_overrides
"""

from fastapi import Request

from todo_api.services.task_workflows import TaskWorkflow
from todo_api.services.user_workflows import UserWorkflow


def get_user_workflow(request: Request) -> UserWorkflow:
    return request.app.state.user_workflow


def get_task_workflow(request: Request) -> TaskWorkflow:
    return request.app.state.task_workflow
