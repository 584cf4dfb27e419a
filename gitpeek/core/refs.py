"""Reference reading for gitpeek."""

import logging
from typing import List, Optional

from .errors import RefError

logger = logging.getLogger(__name__)

SYMBOLIC_PREFIX = 'ref: '
HEADS_PREFIX = 'refs/heads/'


class Ref:
    """A named pointer to an object id."""

    def __init__(self, name: str, target: str, current: bool = False):
        self.name = name
        self.target = target
        self.current = current

    def describe(self) -> str:
        marker = '* ' if self.current else ''
        return f"{marker}{self.name} {self.target}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ref):
            return NotImplemented
        return (self.name, self.target, self.current) == (other.name, other.target, other.current)

    def __repr__(self) -> str:
        return f"Ref({self.name!r}, {self.target[:7]!r}, current={self.current})"


class RefManager:
    """
    Reads branch references and HEAD.

    Handles:
    - Symbolic HEAD (``ref: refs/heads/<name>``)
    - Detached HEAD (a bare object id)
    - Branch references under refs/heads, including nested names
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.git_dir = repo.git_dir
        self.heads_dir = repo.heads_dir
        self.head_file = repo.head_file

    def _read_first_line(self, path) -> str:
        try:
            content = path.read_text()
        except OSError as e:
            raise RefError(f"Cannot read {path}: {e}") from e
        return content.split('\n', 1)[0].strip()

    def read_head(self) -> Optional[str]:
        """
        Read the raw content of HEAD.

        Returns:
            First line of HEAD, or None if HEAD doesn't exist
        """
        if not self.head_file.exists():
            return None
        return self._read_first_line(self.head_file)

    def get_current_branch(self) -> Optional[str]:
        """
        Get the current branch name.

        Returns:
            Branch name or None if HEAD is missing or detached
        """
        content = self.read_head()
        if content and content.startswith(SYMBOLIC_PREFIX + HEADS_PREFIX):
            return content[len(SYMBOLIC_PREFIX + HEADS_PREFIX):]
        return None

    def is_detached_head(self) -> bool:
        content = self.read_head()
        return bool(content) and not content.startswith(SYMBOLIC_PREFIX)

    def read_ref(self, ref_name: str) -> Optional[str]:
        """
        Read a reference file below the repository directory.

        Args:
            ref_name: Reference path (e.g., 'refs/heads/main')

        Returns:
            Object id or None if the reference doesn't exist
        """
        ref_path = self.git_dir / ref_name
        if not ref_path.is_file():
            return None

        content = self._read_first_line(ref_path)
        if content.startswith(SYMBOLIC_PREFIX):
            return self.read_ref(content[len(SYMBOLIC_PREFIX):])
        return content

    def resolve_head(self) -> Optional[str]:
        """
        Resolve HEAD to an object id.

        Returns:
            Object id or None if HEAD or its branch doesn't exist
        """
        content = self.read_head()
        if not content:
            return None
        if content.startswith(SYMBOLIC_PREFIX):
            return self.read_ref(content[len(SYMBOLIC_PREFIX):])
        return content

    def list_branches(self) -> List[Ref]:
        """
        List all branches, marking the checked-out one.

        Returns:
            List of Ref sorted by branch name

        Raises:
            RefError: If the heads directory or a branch file cannot be read
        """
        if not self.heads_dir.is_dir():
            raise RefError(f"Cannot read branches: {self.heads_dir} is not a directory")

        current = self.get_current_branch()
        branches = []
        for branch_file in self.heads_dir.rglob('*'):
            if branch_file.is_file():
                name = branch_file.relative_to(self.heads_dir).as_posix()
                target = self._read_first_line(branch_file)
                branches.append(Ref(name, target, current=name == current))

        logger.debug("Found %d branches in %s", len(branches), self.heads_dir)
        return sorted(branches, key=lambda ref: ref.name)
