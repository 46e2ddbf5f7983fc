"""Capability enum and CapabilitySet."""

from __future__ import annotations

import enum

from blobfs._errors import OperationNotImplemented


class Capability(enum.Enum):
    """Operation groups a filesystem may support."""

    READ = "read"
    WRITE = "write"
    APPEND = "append"
    DELETE = "delete"
    LIST = "list"
    MOVE = "move"
    COPY = "copy"
    CREATE_DIR = "create_dir"
    METADATA = "metadata"


class CapabilitySet:
    """Immutable set of capabilities declared by a filesystem.

    :param capabilities: The set of supported capabilities.
    """

    __slots__ = ("_caps",)
    _caps: frozenset[Capability]

    def __init__(self, capabilities: set[Capability]) -> None:
        object.__setattr__(self, "_caps", frozenset(capabilities))

    def supports(self, cap: Capability) -> bool:
        """Check whether a capability is supported."""
        return cap in self._caps

    def require(self, cap: Capability, *, operation: str, message: str = "", path: str | None = None) -> None:
        """Raise if a capability is not supported.

        :param operation: Name of the filesystem method being invoked.
        :raises OperationNotImplemented: If the capability is missing.
        """
        if cap not in self._caps:
            raise OperationNotImplemented(
                message or f"Capability '{cap.value}' is not supported",
                operation=operation,
                path=path,
            )

    def __contains__(self, cap: object) -> bool:
        return cap in self._caps

    def __repr__(self) -> str:
        names = sorted(c.name for c in self._caps)
        return f"CapabilitySet({{{', '.join(names)}}})"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("CapabilitySet is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("CapabilitySet is immutable")
