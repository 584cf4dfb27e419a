"""Shared pytest fixtures for gitpeek tests."""

import hashlib
import io
import shutil
import tempfile
import zlib
from pathlib import Path

import pytest

from gitpeek.core.repository import Repository
from gitpeek.core.stream import DelimitedReader


def frame(obj_type, body):
    """Build the decompressed bytes of an object."""
    return f"{obj_type} {len(body)}\0".encode() + body


def tree_entry(mode, name, raw_id):
    """Build one tree entry: <mode> <name>\\0<20 raw bytes>."""
    return f"{mode} {name}".encode() + b'\0' + raw_id


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def git_dir(temp_dir):
    """Create a bare-bones .git directory with objects, refs and HEAD."""
    git_dir = temp_dir / '.git'
    (git_dir / 'objects').mkdir(parents=True)
    (git_dir / 'refs' / 'heads').mkdir(parents=True)
    (git_dir / 'HEAD').write_text('ref: refs/heads/main\n')
    return git_dir


@pytest.fixture
def repo(git_dir):
    """Repository over the temporary .git directory."""
    return Repository(str(git_dir))


@pytest.fixture
def write_raw_object(git_dir):
    """
    Return a helper storing already-framed bytes as a loose object.

    The object id is the SHA-1 of the framed bytes unless one is given.
    """
    def _write(content, object_hash=None, compress=True):
        object_hash = object_hash or hashlib.sha1(content).hexdigest()
        path = git_dir / 'objects' / object_hash[:2] / object_hash[2:]
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(zlib.compress(content) if compress else content)
        return object_hash
    return _write


@pytest.fixture
def write_object(write_raw_object):
    """Return a helper storing a typed object body as a loose object."""
    def _write(obj_type, body, object_hash=None):
        return write_raw_object(frame(obj_type, body), object_hash)
    return _write


@pytest.fixture
def write_branch(git_dir):
    """Return a helper creating refs/heads/<name>."""
    def _write(name, target, newline=True):
        path = git_dir / 'refs' / 'heads' / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(target + ('\n' if newline else ''))
        return path
    return _write


@pytest.fixture
def make_reader():
    """Return a helper wrapping bytes in a DelimitedReader."""
    def _make(data, buffer_size=8192):
        return DelimitedReader(io.BytesIO(data), buffer_size=buffer_size)
    return _make


@pytest.fixture
def sample_ids():
    """Raw 20-byte object ids used in tree fixtures."""
    return {
        'counting': bytes(range(20)),
        'zeros': bytes(20),
        'ones': b'\x11' * 20,
    }


@pytest.fixture
def sample_commit_body():
    """Commit text with two parents."""
    return (
        b"tree " + b"a" * 40 + b"\n"
        b"parent " + b"b" * 40 + b"\n"
        b"parent " + b"c" * 40 + b"\n"
        b"author Test User <test@example.com> 1700000000 +0000\n"
        b"committer Test User <test@example.com> 1700000000 +0000\n"
        b"\n"
        b"Merge feature\n\nDetails here.\n"
    )


@pytest.fixture
def framed():
    """Return the object framing helper."""
    return frame


@pytest.fixture
def entry_bytes():
    """Return the tree entry builder."""
    return tree_entry
