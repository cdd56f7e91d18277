from __future__ import annotations

from pathlib import Path

from github import Github

from prbadge_core.models import Change, FileChangeEntry


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def get_diff(pr):
    return pr.get_files()


def change_from_pull(pr, repo_name: str) -> Change:
    """Snapshot a pull request as the selected Change."""
    return Change(id=str(pr.number), current_revision=pr.head.sha, project=repo_name)


def file_entries(files, root: str | Path) -> list[FileChangeEntry]:
    """Map GitHub diff files to local working-copy entries under root.

    Renames keep the old name on the before side; removed files have no
    after side and added files have no before side.
    """
    root = Path(root).absolute()
    entries = []
    for f in files:
        after = None if f.status == "removed" else str(root / f.filename)
        if f.status == "added":
            before = None
        else:
            before = str(root / (getattr(f, "previous_filename", None) or f.filename))
        entries.append(FileChangeEntry(after_path=after, before_path=before))
    return entries
