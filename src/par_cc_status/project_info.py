"""Project name and type detection."""

from __future__ import annotations

from pathlib import Path

from .enums import ProjectType
from .models import ProjectInfo

# Checked in order, first match wins
PROJECT_MARKERS: tuple[tuple[tuple[str, ...], ProjectType], ...] = (
    (("pyproject.toml",), ProjectType.PYTHON),
    (("package.json",), ProjectType.JAVASCRIPT),
    (("build.gradle", "build.gradle.kts"), ProjectType.JAVA),
    (("Cargo.toml",), ProjectType.RUST),
    (("go.mod",), ProjectType.GO),
)


def detect_project_type(project_path: Path) -> ProjectType | None:
    """Classify a directory by the first marker file it contains."""
    for markers, project_type in PROJECT_MARKERS:
        if any((project_path / marker).is_file() for marker in markers):
            return project_type
    return None


def get_project_info(current_dir: str | Path) -> ProjectInfo:
    """Get the project name and type for the working directory.

    A directory that does not exist yields the name "unknown".
    """
    if not current_dir:
        return ProjectInfo(name="unknown")
    path = Path(current_dir)
    try:
        if not path.is_dir():
            return ProjectInfo(name="unknown")
        project_type = detect_project_type(path)
    except OSError:
        return ProjectInfo(name="unknown")
    return ProjectInfo(name=path.name or str(path), path=path, project_type=project_type)
