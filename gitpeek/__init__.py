"""gitpeek - inspect the loose objects and branches of a Git repository."""

__version__ = '0.1.0'

from gitpeek.core.repository import Repository
from gitpeek.core.objects import ObjectHeader, TreeEntry, BlobContent, CommitInfo

__all__ = [
    'Repository',
    'ObjectHeader',
    'TreeEntry',
    'BlobContent',
    'CommitInfo',
]
