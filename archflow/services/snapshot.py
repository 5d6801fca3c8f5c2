"""
Repository snapshot: the slice of a repository tarball the analyzer sees.

GitHub tarballs wrap everything in a single ``{owner}-{name}-{sha}/`` root
directory, which is stripped. Hidden entries and vendored dependency trees
are skipped. Contents are read straight from the in-memory archive; nothing
is written to disk.
"""

import io
import logging
import re
import tarfile
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

# Limits for the analyzer prompt
MAX_KEY_FILES = 10
MAX_SAMPLE_CHARS = 2000

SKIPPED_DIRECTORIES: set[str] = {"node_modules", "__pycache__", "venv", "dist", "build"}

# Priority patterns for key files, matched against stripped relative paths
KEY_FILE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"(^|/)package\.json$"),
    re.compile(r"(^|/)pyproject\.toml$"),
    re.compile(r"(^|/)requirements\.txt$"),
    re.compile(r"(^|/)README\.md$", re.IGNORECASE),
    re.compile(r"^src/.*\.(ts|js|tsx|jsx|py)$"),
    re.compile(r"^lib/.*\.(ts|js|tsx|jsx)$"),
    re.compile(r"^app/.*\.(ts|js|tsx|jsx|py)$"),
    re.compile(r"(^|/)server\.(ts|js|py)$"),
    re.compile(r"(^|/)index\.(ts|js|tsx|jsx)$"),
    re.compile(r"(^|/)main\.(ts|js|tsx|jsx|py|go)$"),
]


class SnapshotError(Exception):
    """The downloaded archive could not be read."""


@dataclass
class RepoSnapshot:
    """File listing and key-file samples of a repository."""

    files: list[str] = field(default_factory=list)
    samples: dict[str, str] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.files


def _strip_root(name: str) -> str:
    parts = name.split("/", 1)
    return parts[1] if len(parts) == 2 else ""


def _is_skipped(path: str) -> bool:
    return any(part.startswith(".") or part in SKIPPED_DIRECTORIES for part in path.split("/"))


def is_key_file(path: str) -> bool:
    return any(pattern.search(path) for pattern in KEY_FILE_PATTERNS)


def _truncate(content: str) -> str:
    if len(content) > MAX_SAMPLE_CHARS:
        return content[:MAX_SAMPLE_CHARS] + "\n... (truncated)"
    return content


def extract_snapshot(archive: bytes) -> RepoSnapshot:
    """
    Build a snapshot from a gzipped repository tarball.

    Args:
        archive: Raw tarball bytes; empty bytes yield an empty snapshot

    Returns:
        RepoSnapshot with all regular files and up to MAX_KEY_FILES samples

    Raises:
        SnapshotError: If the archive is not a readable tarball
    """
    if not archive:
        return RepoSnapshot()

    snapshot = RepoSnapshot()
    try:
        with tarfile.open(fileobj=io.BytesIO(archive), mode="r:*") as tar:
            members: dict[str, tarfile.TarInfo] = {}
            for member in tar.getmembers():
                if not member.isfile():
                    continue
                path = _strip_root(member.name)
                if not path or path.startswith("/") or ".." in path.split("/") or _is_skipped(path):
                    continue
                snapshot.files.append(path)
                members[path] = member

            key_files = [path for path in snapshot.files if is_key_file(path)][:MAX_KEY_FILES]
            for path in key_files:
                handle = tar.extractfile(members[path])
                if handle is None:
                    continue
                content = handle.read().decode("utf-8", errors="replace")
                snapshot.samples[path] = _truncate(content)
    except tarfile.TarError as e:
        raise SnapshotError(f"Failed to extract repository archive: {e}") from e

    logger.info(f"Extracted {len(snapshot.files)} files ({len(snapshot.samples)} key files sampled)")
    return snapshot
