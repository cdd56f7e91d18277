"""Working-copy path → repository-relative path conversion."""

from __future__ import annotations

from pathlib import Path, PurePath


class PathResolver:
    """Maps local absolute paths to the form GitHub uses for comment paths.

    ``repositories`` maps a remote project ("owner/name") to its local
    checkout. When the remote project is not listed, the host's project root
    is used instead.
    """

    def __init__(self, repositories: dict[str, str] | None = None):
        self._repositories = dict(repositories or {})

    def root_for(self, project_root: str | Path, remote_project: str | None) -> Path:
        if remote_project and remote_project in self._repositories:
            return Path(self._repositories[remote_project])
        return Path(project_root)

    def get_relative_or_absolute_path(
        self,
        project_root: str | Path,
        absolute_path: str,
        remote_project: str | None = None,
    ) -> str:
        """Return absolute_path relative to the repository root, or unchanged.

        Never raises: a path outside the root, or one that is already
        relative, is returned as given.
        """
        path = PurePath(absolute_path)
        if not path.is_absolute():
            return absolute_path
        root = self.root_for(project_root, remote_project)
        try:
            return path.relative_to(root.absolute()).as_posix()
        except ValueError:
            return absolute_path
