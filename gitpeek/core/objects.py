"""Object decoders for gitpeek.

A decompressed loose object is framed as::

    <type> <ascii-decimal-length>\\0<body>

The header is shared by every kind; the body grammar depends on the type:

- blob:   raw bytes, exactly <length> of them
- tree:   repeated ``<mode> <name>\\0<20-byte id>`` until the stream ends
- commit: text, exactly <length> bytes

Every decoder reads from a ``DelimitedReader`` and never looks at more
bytes than its grammar requires.
"""

import logging
from typing import Callable, Iterator, List, Optional, Union

from .errors import InvalidHeaderError, InvalidTreeEntryError
from .hash import OBJECT_ID_LENGTH, to_hex
from .stream import DelimitedReader

logger = logging.getLogger(__name__)

NUL = b'\0'
TRUNCATED_SIZE = 3072
TRUNCATION_NOTICE = "(... truncated to 3KB)"
UNSUPPORTED_NOTICE = "Parsing this tag-type not yet supported"
SUPPORTED_TYPES = ('blob', 'tree', 'commit')


class ObjectHeader:
    """Type and declared body length of an object."""

    def __init__(self, obj_type: str, length: int):
        """
        Initialize header.

        Args:
            obj_type: Object type as written in the header
            length: Declared body length in bytes
        """
        self.type = obj_type
        self.length = length

    @property
    def supported(self) -> bool:
        """Whether a body decoder exists for this type."""
        return self.type in SUPPORTED_TYPES

    def summary(self) -> str:
        return f"Type: {self.type}, len: {self.length}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, ObjectHeader):
            return NotImplemented
        return (self.type, self.length) == (other.type, other.length)

    def __repr__(self) -> str:
        return f"ObjectHeader(type={self.type!r}, length={self.length})"


class TreeEntry:
    """
    A single entry of a tree object.

    Each entry contains:
    - mode: File mode string as stored (e.g. '100644', '40000')
    - name: Path segment
    - hash: Object id of the entry, as lowercase hex
    """

    def __init__(self, mode: str, name: str, obj_hash: str):
        self.mode = mode
        self.name = name
        self.hash = obj_hash

    @property
    def kind(self) -> str:
        """Object kind implied by the mode."""
        if self.mode in ('40000', '040000'):
            return 'tree'
        if self.mode == '160000':
            return 'commit'
        return 'blob'

    def describe(self) -> str:
        return f"fileMode: {self.mode}, filename: {self.name}, SHA: {self.hash}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, TreeEntry):
            return NotImplemented
        return (self.mode, self.name, self.hash) == (other.mode, other.name, other.hash)

    def __repr__(self) -> str:
        return f"TreeEntry({self.mode} {self.kind} {self.hash[:7]} {self.name})"


class BlobContent:
    """
    The rendered part of a blob.

    Only the first ``TRUNCATED_SIZE`` bytes of a blob are read unless the
    caller lifts the limit; ``truncated`` records whether the declared
    length was larger than what was read.
    """

    def __init__(self, data: bytes, declared_length: int):
        self.data = data
        self.declared_length = declared_length

    @property
    def truncated(self) -> bool:
        return self.declared_length > len(self.data)

    def render(self) -> bytes:
        """
        Render blob content for display.

        Returns:
            bytes: The raw content, followed by the truncation notice when
            the blob was cut short
        """
        if self.truncated:
            return self.data + f"\n\n{TRUNCATION_NOTICE}\n".encode()
        return self.data

    def __repr__(self) -> str:
        return f"BlobContent(size={len(self.data)}, declared={self.declared_length})"


class CommitInfo:
    """
    Structured view of a commit body.

    This is an optional layer on top of the verbatim commit text: the
    decoder itself never parses commits, callers opt in via ``parse``.
    """

    def __init__(self):
        self.tree: str = ''
        self.parents: List[str] = []
        self.author: str = ''
        self.committer: str = ''
        self.message: str = ''

    @classmethod
    def parse(cls, data: bytes) -> 'CommitInfo':
        """
        Parse commit text into fields.

        Format:
        tree <tree-hash>
        parent <parent-hash>  (zero or more)
        author Name <email> <timestamp> <timezone>
        committer Name <email> <timestamp> <timezone>

        <commit message>

        Unknown header lines (gpgsig, encoding, mergetag) are skipped.

        Args:
            data: Commit body as read by ``decode_commit``

        Returns:
            CommitInfo: Parsed commit
        """
        commit = cls()
        content = data.decode('utf-8', errors='replace')
        header, _, message = content.partition('\n\n')

        for line in header.split('\n'):
            if line.startswith('tree '):
                commit.tree = line[5:]
            elif line.startswith('parent '):
                commit.parents.append(line[7:])
            elif line.startswith('author '):
                commit.author = line[7:]
            elif line.startswith('committer '):
                commit.committer = line[10:]

        commit.message = message
        return commit

    def render(self) -> str:
        lines = [f"Tree:      {self.tree}"]
        for parent in self.parents:
            lines.append(f"Parent:    {parent}")
        lines.append(f"Author:    {self.author}")
        lines.append(f"Committer: {self.committer}")
        lines.append('')
        for line in self.message.rstrip('\n').split('\n'):
            lines.append(f"    {line}")
        return '\n'.join(lines) + '\n'

    def __repr__(self) -> str:
        parent_info = f", parents={len(self.parents)}" if self.parents else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"CommitInfo(tree={self.tree[:7]}{parent_info}, msg='{msg_preview}')"


def decode_header(reader: DelimitedReader) -> ObjectHeader:
    """
    Decode the ``<type> <length>\\0`` header of an object.

    Args:
        reader: Reader positioned at the start of the decompressed object

    Returns:
        ObjectHeader: Parsed header

    Raises:
        InvalidHeaderError: If the header does not have exactly two
            space-separated fields or the length is not a non-negative integer
        UnexpectedEndOfStreamError: If the stream ends before the NUL
    """
    raw = reader.read_until(NUL, must_exist=True)
    fragment = raw[:-1]

    try:
        text = fragment.decode('ascii')
    except UnicodeDecodeError:
        raise InvalidHeaderError(f"Invalid header: {fragment!r}", fragment)

    fields = text.split(' ')
    if len(fields) != 2:
        raise InvalidHeaderError(f"Invalid header: {fields}", fragment)

    obj_type, size_str = fields
    if not size_str.isdigit():
        raise InvalidHeaderError(f"Invalid object length in header: {size_str!r}", fragment)

    header = ObjectHeader(obj_type, int(size_str))
    logger.debug("Decoded header %r", header)
    return header


def iter_tree_entries(reader: DelimitedReader) -> Iterator[TreeEntry]:
    """
    Decode tree entries one at a time, in stream order.

    The tree body carries no entry count: decoding stops when a read for
    the next entry finds the stream already exhausted.

    Args:
        reader: Reader positioned just after the header

    Yields:
        TreeEntry: Next entry of the tree

    Raises:
        InvalidTreeEntryError: If an entry is cut off before its NUL or does
            not split into mode and name
        UnexpectedEndOfStreamError: If fewer than 20 id bytes follow an entry
    """
    while True:
        raw = reader.read_until(NUL, must_exist=False)
        if not raw:
            return

        if raw[-1:] != NUL:
            raise InvalidTreeEntryError(f"Unexpected end of tree entry: {raw!r}", raw)

        fields = raw[:-1].split(b' ')
        if len(fields) != 2:
            raise InvalidTreeEntryError(
                f"Tree entry must have a mode and a name: {raw[:-1]!r}", raw
            )

        mode, name = fields
        obj_hash = to_hex(reader.read_exact(OBJECT_ID_LENGTH))
        yield TreeEntry(
            mode.decode('ascii', errors='replace'),
            name.decode('utf-8', errors='replace'),
            obj_hash,
        )


def decode_tree(reader: DelimitedReader) -> List[TreeEntry]:
    """Decode every entry of a tree body."""
    return list(iter_tree_entries(reader))


def decode_blob(reader: DelimitedReader, length: int,
                limit: Optional[int] = TRUNCATED_SIZE) -> BlobContent:
    """
    Read the displayable part of a blob body.

    At most ``limit`` bytes are read; the rest of the body is left unread.

    Args:
        reader: Reader positioned just after the header
        length: Declared length from the header
        limit: Maximum number of bytes to read, or None for no limit

    Returns:
        BlobContent: Content read and the declared length
    """
    to_read = length if limit is None else min(length, limit)
    return BlobContent(reader.read_exact(to_read), length)


def decode_commit(reader: DelimitedReader, length: int) -> bytes:
    """Read a commit body verbatim."""
    return reader.read_exact(length)


Emit = Callable[[Union[str, bytes]], None]


def render_object(reader: DelimitedReader, emit: Emit,
                  blob_limit: Optional[int] = TRUNCATED_SIZE,
                  parse_commit: bool = False,
                  style_summary: Optional[Callable[[str], str]] = None) -> ObjectHeader:
    """
    Decode an object and pass its rendering to ``emit`` piece by piece.

    The header summary is emitted before any body byte is read, so it is
    visible even when the body turns out to be malformed. Tree entries are
    emitted as they are decoded.

    Args:
        reader: Reader positioned at the start of the decompressed object
        emit: Callable receiving text or raw bytes to output
        blob_limit: Blob truncation cap, or None to show whole blobs
        parse_commit: Render commits as structured fields instead of
            verbatim text
        style_summary: Applied to the summary line before it is emitted

    Returns:
        ObjectHeader: The decoded header
    """
    header = decode_header(reader)
    summary = header.summary()
    emit((style_summary(summary) if style_summary else summary) + '\n')
    render_body(reader, header, emit, blob_limit, parse_commit)
    return header


def render_body(reader: DelimitedReader, header: ObjectHeader, emit: Emit,
                blob_limit: Optional[int] = TRUNCATED_SIZE,
                parse_commit: bool = False) -> None:
    """Decode the body described by ``header`` and emit its rendering."""
    if not header.supported:
        emit(UNSUPPORTED_NOTICE + '\n')
    elif header.type == 'tree':
        for entry in iter_tree_entries(reader):
            emit(entry.describe() + '\n')
    elif header.type == 'blob':
        emit(decode_blob(reader, header.length, blob_limit).render())
    elif header.type == 'commit':
        data = decode_commit(reader, header.length)
        emit(CommitInfo.parse(data).render() if parse_commit else data)
