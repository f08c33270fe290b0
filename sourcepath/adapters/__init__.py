"""Adapters connecting sourcepath to host-provided services."""

from sourcepath.adapters.completion import CompletionBridge, python_completions

__all__ = ["CompletionBridge", "python_completions"]
