"""Version-control history queries for spec documents."""

from specgraph.models import StatusTransition

from ._fake import FakeHistory
from ._git import GitHistory
from ._protocol import VersionHistoryProtocol

__all__ = [
    "FakeHistory",
    "GitHistory",
    "StatusTransition",
    "VersionHistoryProtocol",
]
