"""Repository access for gitpeek."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .errors import NotARepositoryError, ObjectNotFoundError
from .hash import is_full_hash, normalize_hash, split_hash
from .stream import DecompressionSource, DelimitedReader

logger = logging.getLogger(__name__)

DEFAULT_GIT_DIR = '.git'


class Repository:
    """
    Read-only view of a repository directory.

    The repository directory (normally ``.git``) is injected rather than
    assumed, so everything below it is addressed relative to ``git_dir``.
    """

    def __init__(self, git_dir: str):
        """
        Initialize repository.

        Args:
            git_dir: Path to the repository directory (the one holding
                ``objects/``, ``refs/`` and ``HEAD``)
        """
        self.git_dir = Path(git_dir).resolve()
        self.objects_dir = self.git_dir / 'objects'
        self.refs_dir = self.git_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.head_file = self.git_dir / 'HEAD'
        self.config_file = self.git_dir / 'config'

        self._ref_manager = None

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @classmethod
    def find_repository(cls, path: str = '.',
                        dir_name: str = DEFAULT_GIT_DIR) -> 'Repository':
        """
        Find repository by searching up the directory tree.

        Searches from the given path upwards until it finds a directory
        named ``dir_name`` or reaches the filesystem root.

        Args:
            path: Starting path for search
            dir_name: Name of the repository directory

        Returns:
            Repository: The closest enclosing repository

        Raises:
            NotARepositoryError: If no repository directory is found
        """
        start = Path(path).resolve()
        current = start

        while True:
            candidate = current / dir_name
            if candidate.is_dir():
                logger.debug("Found repository at %s", candidate)
                return cls(str(candidate))

            # Reached filesystem root
            if current == current.parent:
                raise NotARepositoryError(
                    f"Not a repository (or any parent up to {current}): {start}"
                )

            current = current.parent

    def object_path(self, object_hash: str) -> Path:
        """
        Get filesystem path for an object.

        Example: ab/cdef0123456789... for hash abcdef0123456789...

        Args:
            object_hash: 40-character object id

        Returns:
            Path: Full path to object file
        """
        directory, filename = split_hash(object_hash)
        return self.objects_dir / directory / filename

    def resolve_hash(self, object_hash: str) -> str:
        """
        Expand a full or abbreviated object id to a full one.

        Args:
            object_hash: Object id, or a unique prefix of at least 4 characters

        Returns:
            str: Full lowercase object id

        Raises:
            InvalidHashError: If the id is not hex or has a bad length
            ObjectNotFoundError: If a prefix matches no object or several
        """
        value = normalize_hash(object_hash)
        if is_full_hash(value):
            return value

        directory, rest = split_hash(value)
        subdir = self.objects_dir / directory
        matches = []
        if subdir.is_dir():
            matches = sorted(
                directory + obj_file.name
                for obj_file in subdir.iterdir()
                if obj_file.name.startswith(rest)
            )

        if not matches:
            raise ObjectNotFoundError(f"Object {value} not found")
        if len(matches) > 1:
            raise ObjectNotFoundError(
                f"Short object id {value} is ambiguous ({len(matches)} matches)"
            )

        logger.debug("Resolved %s to %s", value, matches[0])
        return matches[0]

    @contextmanager
    def open_object(self, object_hash: str) -> Iterator[DelimitedReader]:
        """
        Open an object for decoding.

        The object file and its decompressor stay open only for the
        duration of the ``with`` block and are closed on every exit path,
        including when decoding raises.

        Args:
            object_hash: Full or abbreviated object id

        Yields:
            DelimitedReader: Reader positioned at the object header

        Raises:
            ObjectNotFoundError: If the object file cannot be opened
        """
        full_hash = self.resolve_hash(object_hash)
        path = self.object_path(full_hash)
        logger.debug("Opening object %s at %s", full_hash, path)

        try:
            raw = open(path, 'rb')
        except OSError as e:
            raise ObjectNotFoundError(f"Object {full_hash} not found: {e}") from e

        with DecompressionSource(raw) as source:
            yield DelimitedReader(source)

    def __repr__(self) -> str:
        return f"Repository(git_dir={self.git_dir})"


def open_repository(git_dir: Optional[str] = None, start: str = '.',
                    dir_name: str = DEFAULT_GIT_DIR) -> Repository:
    """
    Open an explicit repository directory or discover one.

    Args:
        git_dir: Explicit repository directory; skips discovery when given
        start: Starting path for discovery
        dir_name: Repository directory name used during discovery

    Returns:
        Repository: Opened repository

    Raises:
        NotARepositoryError: If the directory does not exist or none is found
    """
    if git_dir is not None:
        if not Path(git_dir).is_dir():
            raise NotARepositoryError(f"Not a repository: {git_dir}")
        return Repository(git_dir)
    return Repository.find_repository(start, dir_name)
