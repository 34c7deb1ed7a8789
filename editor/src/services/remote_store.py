"""
Remote mask persistence contract

The engine never talks to the network itself. Whoever embeds it may hand the
MaskStore an object with a delete_mask(mask_id) method; failures are reported
through these exception types so local state can stay authoritative.
"""

from typing import Protocol


class RemoteStoreError(Exception):
    """Remote persistence call failed"""

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.status = status


class MaskNotFoundError(RemoteStoreError):
    """Remote copy does not exist (HTTP 404). Treated as already deleted."""

    def __init__(self, mask_id: str):
        super().__init__(f"Mask '{mask_id}' not found on remote", status=404)
        self.mask_id = mask_id


class RemoteMaskStore(Protocol):
    """Anything the MaskStore can forward deletions to"""

    def delete_mask(self, mask_id: str) -> None:
        ...
