"""
Checks that a project root can receive a new Amplify backend
"""

from pathlib import Path

from ampx.lib.project.exceptions import ProjectDirectoryExistsError

BACKEND_DIR_NAME = "amplify"


class ProjectRootValidator:
    def __init__(self, project_root: str):
        self._project_root = Path(project_root)

    def validate(self) -> None:
        backend_dir = self._project_root / BACKEND_DIR_NAME
        if backend_dir.exists():
            raise ProjectDirectoryExistsError(backend_dir=str(backend_dir))
