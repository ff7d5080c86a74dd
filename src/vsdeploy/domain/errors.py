from __future__ import annotations

"""
Domain Error Taxonomy.

Exceptions raised across the host boundary. Only InvalidPath is meant to
escape a top-level operation; the host-side failures are caught where they
originate and reported per item.
"""


class VsDeployError(Exception):
    """Base class for every error raised by vsdeploy."""


class InvalidPath(VsDeployError):
    """
    A relative path could not be computed.

    Raised when a file path does not live under the stated root, which is a
    contract violation by the caller.
    """

    def __init__(self, root: str, full_path: str):
        self.root = root
        self.full_path = full_path
        super().__init__(f"Path '{full_path}' is not located under '{root}'.")


class HostRejected(VsDeployError):
    """A create, delete or write call on the hierarchy provider failed."""

    def __init__(self, operation: str, name: str, reason: object = None):
        self.operation = operation
        self.name = name
        self.reason = reason
        msg = f"Host rejected {operation} of '{name}'"
        if reason is not None:
            msg += f": {reason}"
        super().__init__(msg)


class SlotUnavailable(VsDeployError):
    """The configuration target does not expose the requested property."""

    def __init__(self, property_name: str):
        self.property_name = property_name
        super().__init__(f"Build property '{property_name}' is not available on target.")
