"""Exception hierarchy for svg-context."""

from __future__ import annotations


class SVGContextError(Exception):
    """Base exception for all svg-context errors."""


class StateUnderflowError(SVGContextError):
    """restore_state() called with only the root state on the stack."""

    def __init__(self, message: str = "restore_state() called without a matching save_state()") -> None:
        super().__init__(message)


class GroupUnderflowError(SVGContextError):
    """pop_group() called while no named group is open in the current frame."""

    def __init__(
        self, message: str = "pop_group() without a matching push_group() since the last save_state()"
    ) -> None:
        super().__init__(message)


class UnsupportedDocumentShapeError(SVGContextError):
    """The document root handed to the renderer cannot be drawn into."""

    def __init__(self, tag: str, child_count: int) -> None:
        self.tag = tag
        self.child_count = child_count
        super().__init__(
            f"Expected an empty <svg> root element, got <{tag}> with {child_count} children"
        )


class FontLoadError(SVGContextError):
    """A typeface could not be loaded or queried."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot load font {source}: {reason}")


class ScriptError(SVGContextError):
    """A draw script contains an invalid operation."""

    def __init__(self, message: str, index: int | None = None) -> None:
        self.index = index
        if index is not None:
            message = f"operation #{index}: {message}"
        super().__init__(message)


class ConfigError(SVGContextError):
    """Configuration file or value is invalid."""
