"""Change notification for the scheduling domain."""

from .snapshot_publisher import SnapshotPublisher

__all__ = ["SnapshotPublisher"]
