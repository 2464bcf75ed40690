"""Decorators for CLI commands."""

from functools import wraps
from typing import Callable, TypeVar

import typer

from ..orchestrator.operations import EngineNotFound, OperationError
from .output import out
from .service import get_service

R = TypeVar("R")


def fail(error: OperationError) -> typer.Exit:
    """Print *error* and its hint; return the exit to raise."""
    out.error(str(error))
    if error.hint:
        out.hint(error.hint)
    return typer.Exit(1)


def require_engine(func: Callable[..., R]) -> Callable[..., R]:
    """Decorator that checks engine availability and handles OperationError."""
    @wraps(func)
    def wrapper(*args: object, **kwargs: object) -> R:
        try:
            service = get_service()
            if not service.engine.is_available():
                raise EngineNotFound(service.config.docker_binary)
            return func(*args, **kwargs)
        except OperationError as e:
            raise fail(e)
    return wrapper
