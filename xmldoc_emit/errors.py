"""Failure taxonomy for documentation conversion.

Every fatal kind derives from ``ConversionError`` so callers can abort the
whole conversion with a single handler. A missing documentation entry is not
an error and has no exception type.
"""

from typing import Any


class ConversionError(Exception):
    """Base class for failures that abort a conversion."""


class LoadFailure(ConversionError):
    """A metadata source, doc source, config file or recipe could not be read."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Failed to load {self.path}: {reason}")


class DuplicateEntry(ConversionError):
    """Two sources claim the same (assembly, identity) key."""

    def __init__(self, assembly: str, identity: str, sources: list[str]) -> None:
        self.assembly = assembly
        self.identity = identity
        self.sources = sources
        super().__init__(
            f"Duplicate documentation entry {identity} in assembly {assembly} "
            f"(sources: {', '.join(sources)})"
        )


class UnsupportedMemberKind(ConversionError):
    """An identity was requested for a member category we do not handle."""

    def __init__(self, member: object) -> None:
        self.member = member
        super().__init__(
            f"Cannot compute a documentation identity for {type(member).__name__}: "
            f"{member!r}"
        )


class WriteOnceConflict(ConversionError):
    """A persistent-store key was written twice with different values."""

    def __init__(self, key: Any, existing: Any, attempted: Any) -> None:
        self.key = key
        self.existing = existing
        self.attempted = attempted
        super().__init__(
            f"Key {key!r} has already been set.\n\t{existing!r}\n\t{attempted!r}"
        )


class DuplicateLinkTarget(WriteOnceConflict):
    """A named link target was defined more than once."""

    def __init__(self, key: str, existing: str, attempted: str) -> None:
        super().__init__(key, existing, attempted)
        self.args = (
            f"Link target has been set more than once.\n"
            f"{key} -> \n\t{existing}\n\t{attempted}",
        )


class CapabilityMismatch(TypeError):
    """A selector was applied to a node that lacks the required capability.

    This is a programming defect in the caller's conversion, not a data error.
    """
