"""Orchestrate jobs running in threads with one entry point and one exit point."""

__version__ = "2.0.0"
__all__ = ["context", "control", "errors", "flow", "guard", "pred", "result", "run"]