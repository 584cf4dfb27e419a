"""Object decoder tests."""

import pytest

from gitpeek.core.errors import (
    InvalidHeaderError, InvalidTreeEntryError, UnexpectedEndOfStreamError,
)
from gitpeek.core.objects import (
    ObjectHeader, TreeEntry, BlobContent, CommitInfo, TRUNCATED_SIZE,
    TRUNCATION_NOTICE, UNSUPPORTED_NOTICE, decode_header, iter_tree_entries,
    decode_tree, decode_blob, decode_commit, render_object,
)


def collect(reader, **kwargs):
    """Render an object into a list of emitted chunks."""
    chunks = []
    header = render_object(reader, chunks.append, **kwargs)
    return header, chunks


class TestHeader:
    """Tests for header decoding."""

    def test_blob_header(self, make_reader):
        """Test a well-formed blob header."""
        reader = make_reader(b'blob 5\0hello')
        assert decode_header(reader) == ObjectHeader('blob', 5)

    @pytest.mark.parametrize('obj_type,length', [
        ('blob', 0), ('tree', 128), ('commit', 245), ('tag', 7),
    ])
    def test_valid_headers(self, make_reader, obj_type, length):
        """Test header decoding returns type and length unchanged."""
        reader = make_reader(f"{obj_type} {length}\0".encode())
        header = decode_header(reader)
        assert header.type == obj_type
        assert header.length == length

    @pytest.mark.parametrize('raw', [
        b'blob5\0',
        b'blob 5 6\0',
        b'blob  5\0',
        b'\0',
    ])
    def test_wrong_field_count(self, make_reader, raw):
        """Test headers without exactly one space are rejected."""
        with pytest.raises(InvalidHeaderError):
            decode_header(make_reader(raw))

    @pytest.mark.parametrize('raw', [
        b'blob five\0',
        b'blob -5\0',
        b'blob +5\0',
        b'blob 5.0\0',
        b'blob \0',
    ])
    def test_non_integer_length(self, make_reader, raw):
        """Test non-integer or negative lengths are rejected."""
        with pytest.raises(InvalidHeaderError):
            decode_header(make_reader(raw))

    def test_error_carries_fragment(self, make_reader):
        """Test the offending header bytes are attached to the error."""
        with pytest.raises(InvalidHeaderError) as excinfo:
            decode_header(make_reader(b'garbage\0'))
        assert excinfo.value.fragment == b'garbage'

    def test_non_ascii_header(self, make_reader):
        """Test non-ASCII header bytes are rejected."""
        with pytest.raises(InvalidHeaderError):
            decode_header(make_reader(b'bl\xffb 5\0'))

    def test_missing_nul(self, make_reader):
        """Test a header without terminator is a truncation error."""
        with pytest.raises(UnexpectedEndOfStreamError):
            decode_header(make_reader(b'blob 5'))

    def test_summary(self):
        """Test the header summary line."""
        assert ObjectHeader('tree', 37).summary() == 'Type: tree, len: 37'

    def test_supported(self):
        """Test supported kinds."""
        assert ObjectHeader('commit', 1).supported
        assert not ObjectHeader('tag', 1).supported


class TestTree:
    """Tests for tree decoding."""

    def test_empty_tree(self, make_reader):
        """Test a tree with no entries."""
        reader = make_reader(b'tree 0\0')
        assert decode_header(reader) == ObjectHeader('tree', 0)
        assert decode_tree(reader) == []

    def test_single_entry(self, make_reader, entry_bytes, sample_ids):
        """Test the hex rendering of an entry id."""
        reader = make_reader(entry_bytes('100644', 'file.txt', sample_ids['counting']))
        entries = decode_tree(reader)
        assert entries == [
            TreeEntry('100644', 'file.txt', '000102030405060708090a0b0c0d0e0f10111213')
        ]

    def test_entries_in_stream_order(self, make_reader, entry_bytes, sample_ids):
        """Test entries are emitted in the order they are stored."""
        body = (
            entry_bytes('100644', 'zebra.txt', sample_ids['zeros'])
            + entry_bytes('40000', 'src', sample_ids['ones'])
            + entry_bytes('100755', 'apple.sh', sample_ids['counting'])
        )
        names = [entry.name for entry in decode_tree(make_reader(body))]
        assert names == ['zebra.txt', 'src', 'apple.sh']

    def test_decoding_is_repeatable(self, make_reader, entry_bytes, sample_ids):
        """Test decoding the same bytes twice gives the same entries."""
        body = (
            entry_bytes('100644', 'a', sample_ids['zeros'])
            + entry_bytes('40000', 'b', sample_ids['ones'])
        )
        assert decode_tree(make_reader(body)) == decode_tree(make_reader(body))

    def test_entry_kind(self):
        """Test kinds derived from modes."""
        assert TreeEntry('40000', 'dir', '0' * 40).kind == 'tree'
        assert TreeEntry('160000', 'sub', '0' * 40).kind == 'commit'
        assert TreeEntry('100644', 'f', '0' * 40).kind == 'blob'

    def test_entry_describe(self):
        """Test entry rendering."""
        entry = TreeEntry('100644', 'file.txt', 'ab' * 20)
        assert entry.describe() == f"fileMode: 100644, filename: file.txt, SHA: {'ab' * 20}"

    def test_entry_missing_nul(self, make_reader, entry_bytes, sample_ids):
        """Test an entry cut off before its NUL."""
        body = entry_bytes('100644', 'a', sample_ids['zeros']) + b'100644 b'
        entries = iter_tree_entries(make_reader(body))
        assert next(entries).name == 'a'
        with pytest.raises(InvalidTreeEntryError):
            next(entries)

    def test_entry_wrong_field_count(self, make_reader, sample_ids):
        """Test names containing spaces or missing modes are rejected."""
        with pytest.raises(InvalidTreeEntryError):
            decode_tree(make_reader(b'100644 my file\0' + sample_ids['zeros']))
        with pytest.raises(InvalidTreeEntryError):
            decode_tree(make_reader(b'100644\0' + sample_ids['zeros']))

    def test_entry_short_id(self, make_reader):
        """Test fewer than 20 id bytes is a truncation error."""
        with pytest.raises(UnexpectedEndOfStreamError):
            decode_tree(make_reader(b'100644 a\0' + b'\x01' * 10))


class TestBlob:
    """Tests for blob decoding."""

    def test_small_blob(self, make_reader):
        """Test a blob under the cap is read whole."""
        reader = make_reader(b'blob 5\0hello')
        header = decode_header(reader)
        blob = decode_blob(reader, header.length)
        assert blob.data == b'hello'
        assert not blob.truncated
        assert blob.render() == b'hello'

    def test_blob_exactly_at_cap(self, make_reader):
        """Test a blob of exactly 3072 bytes is not truncated."""
        body = b'x' * TRUNCATED_SIZE
        blob = decode_blob(make_reader(body), len(body))
        assert len(blob.render()) == TRUNCATED_SIZE
        assert TRUNCATION_NOTICE.encode() not in blob.render()

    def test_large_blob_truncated(self, make_reader, framed):
        """Test a 4000 byte blob renders 3072 bytes plus the notice."""
        body = bytes(i % 251 for i in range(4000))
        reader = make_reader(framed('blob', body))
        header = decode_header(reader)
        blob = decode_blob(reader, header.length)

        assert blob.truncated
        assert blob.data == body[:TRUNCATED_SIZE]
        assert blob.render() == body[:TRUNCATED_SIZE] + b'\n\n(... truncated to 3KB)\n'

        # The remainder is left in the stream
        assert reader.position == len(b'blob 4000\0') + TRUNCATED_SIZE
        assert reader.read_exact(928) == body[TRUNCATED_SIZE:]

    def test_blob_without_limit(self, make_reader):
        """Test lifting the cap reads the whole blob."""
        body = b'y' * 5000
        blob = decode_blob(make_reader(body), len(body), limit=None)
        assert blob.data == body
        assert not blob.truncated

    def test_blob_short_stream(self, make_reader):
        """Test a blob shorter than declared is a truncation error."""
        with pytest.raises(UnexpectedEndOfStreamError):
            decode_blob(make_reader(b'abc'), 10)

    def test_blob_repr(self):
        """Test blob representation."""
        assert repr(BlobContent(b'ab', 10)) == 'BlobContent(size=2, declared=10)'


class TestCommit:
    """Tests for commit decoding."""

    def test_commit_passthrough(self, make_reader, framed, sample_commit_body):
        """Test commit text is returned verbatim."""
        reader = make_reader(framed('commit', sample_commit_body))
        header = decode_header(reader)
        assert decode_commit(reader, header.length) == sample_commit_body

    def test_commit_short_stream(self, make_reader):
        """Test a commit shorter than declared is a truncation error."""
        with pytest.raises(UnexpectedEndOfStreamError):
            decode_commit(make_reader(b'tree abc'), 100)

    def test_commit_parse(self, sample_commit_body):
        """Test structured commit fields."""
        commit = CommitInfo.parse(sample_commit_body)
        assert commit.tree == 'a' * 40
        assert commit.parents == ['b' * 40, 'c' * 40]
        assert commit.author == 'Test User <test@example.com> 1700000000 +0000'
        assert commit.committer == 'Test User <test@example.com> 1700000000 +0000'
        assert commit.message == 'Merge feature\n\nDetails here.\n'

    def test_commit_parse_root(self):
        """Test a commit without parents."""
        commit = CommitInfo.parse(b'tree ' + b'd' * 40 + b'\nauthor A <a@b> 1 +0000\n\nInit\n')
        assert commit.parents == []
        assert commit.message == 'Init\n'

    def test_commit_render(self, sample_commit_body):
        """Test structured rendering indents the message."""
        text = CommitInfo.parse(sample_commit_body).render()
        assert text.startswith(f"Tree:      {'a' * 40}\n")
        assert f"Parent:    {'c' * 40}\n" in text
        assert '    Merge feature\n' in text


class TestRenderObject:
    """Tests for the decode-and-render pipeline."""

    def test_render_blob(self, make_reader):
        """Test the header summary precedes the body."""
        header, chunks = collect(make_reader(b'blob 5\0hello'))
        assert header == ObjectHeader('blob', 5)
        assert chunks == ['Type: blob, len: 5\n', b'hello']

    def test_render_tree(self, make_reader, framed, entry_bytes, sample_ids):
        """Test one chunk per tree entry."""
        body = (
            entry_bytes('100644', 'file.txt', sample_ids['counting'])
            + entry_bytes('40000', 'lib', sample_ids['zeros'])
        )
        _, chunks = collect(make_reader(framed('tree', body)))
        assert chunks == [
            f'Type: tree, len: {len(body)}\n',
            'fileMode: 100644, filename: file.txt, SHA: 000102030405060708090a0b0c0d0e0f10111213\n',
            'fileMode: 40000, filename: lib, SHA: 0000000000000000000000000000000000000000\n',
        ]

    def test_render_commit_verbatim(self, make_reader, framed, sample_commit_body):
        """Test commits are passed through by default."""
        _, chunks = collect(make_reader(framed('commit', sample_commit_body)))
        assert chunks[1] == sample_commit_body

    def test_render_commit_parsed(self, make_reader, framed, sample_commit_body):
        """Test opting into structured commit rendering."""
        _, chunks = collect(make_reader(framed('commit', sample_commit_body)), parse_commit=True)
        assert chunks[1].startswith('Tree:')

    def test_render_unsupported(self, make_reader):
        """Test unsupported kinds emit a notice and read no body."""
        reader = make_reader(b'tag 10\0object abc')
        header, chunks = collect(reader)
        assert header.type == 'tag'
        assert chunks == ['Type: tag, len: 10\n', UNSUPPORTED_NOTICE + '\n']
        assert reader.position == len(b'tag 10\0')

    def test_summary_emitted_before_body_error(self, make_reader):
        """Test the summary is out before a malformed body fails."""
        chunks = []
        with pytest.raises(UnexpectedEndOfStreamError):
            render_object(make_reader(b'blob 10\0abc'), chunks.append)
        assert chunks == ['Type: blob, len: 10\n']

    def test_render_styled_summary(self, make_reader):
        """Test the summary styler only touches the summary line."""
        _, chunks = collect(make_reader(b'blob 5\0hello'), style_summary=lambda s: f'<{s}>')
        assert chunks == ['<Type: blob, len: 5>\n', b'hello']
