"""Runtime engine exports."""

from .loop import CommandRequest, RuntimeBootstrap, RuntimeEngine, RuntimeHooks

__all__ = ["CommandRequest", "RuntimeBootstrap", "RuntimeEngine", "RuntimeHooks"]
