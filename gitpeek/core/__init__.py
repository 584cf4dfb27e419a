"""Core functionality for gitpeek.

This module contains:
- Byte streams (decompression source, delimited reader)
- Object decoders (header, blob, tree, commit)
- Repository access and object lookup
- Reference reading
- Configuration
- Exceptions

The command-line surface lives in gitpeek.cli
"""

from gitpeek.core.errors import (
    GitPeekError, NotARepositoryError, ObjectNotFoundError, CorruptObjectError,
    InvalidHashError, FramingError, InvalidHeaderError, InvalidTreeEntryError,
    UnexpectedEndOfStreamError, RefError,
)
from gitpeek.core.stream import DecompressionSource, DelimitedReader
from gitpeek.core.objects import (
    ObjectHeader, TreeEntry, BlobContent, CommitInfo,
    decode_header, iter_tree_entries, decode_tree, decode_blob, decode_commit,
    render_object, render_body, TRUNCATED_SIZE,
)
from gitpeek.core.repository import Repository, open_repository
from gitpeek.core.refs import Ref, RefManager
from gitpeek.core.config import Config, get_config

__all__ = [
    'GitPeekError',
    'NotARepositoryError',
    'ObjectNotFoundError',
    'CorruptObjectError',
    'InvalidHashError',
    'FramingError',
    'InvalidHeaderError',
    'InvalidTreeEntryError',
    'UnexpectedEndOfStreamError',
    'RefError',
    'DecompressionSource',
    'DelimitedReader',
    'ObjectHeader',
    'TreeEntry',
    'BlobContent',
    'CommitInfo',
    'decode_header',
    'iter_tree_entries',
    'decode_tree',
    'decode_blob',
    'decode_commit',
    'render_object',
    'render_body',
    'TRUNCATED_SIZE',
    'Repository',
    'open_repository',
    'Ref',
    'RefManager',
    'Config',
    'get_config',
]
