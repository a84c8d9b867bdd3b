"""Tracker runtime: scheduler loop, command dispatch, and UI publishing."""

from .loop import RuntimeBootstrap, RuntimeEngine, RuntimeHooks

__all__ = ["RuntimeBootstrap", "RuntimeEngine", "RuntimeHooks"]
