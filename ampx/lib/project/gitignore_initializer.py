"""
Adds the Amplify build artifacts to the .gitignore of a project
"""

import logging
from pathlib import Path
from typing import List

LOG = logging.getLogger(__name__)

GITIGNORE_FILE_NAME = ".gitignore"
SECTION_COMMENT = "# amplify"
IGNORED_PATTERNS = ["node_modules", ".amplify", "amplify_outputs*", "amplifyconfiguration*"]


class GitIgnoreInitializer:
    def __init__(self, project_root: str):
        self._gitignore_path = Path(project_root, GITIGNORE_FILE_NAME)

    def ensure_initialized(self) -> List[str]:
        """
        Appends the missing patterns to .gitignore, creating the file when needed

        Returns
        -------
        List[str]
            Patterns that were added
        """
        existing: List[str] = []
        content = ""
        if self._gitignore_path.is_file():
            content = self._gitignore_path.read_text(encoding="utf-8")
            # "node_modules/" and "/node_modules" ignore the same directory as "node_modules"
            existing = [line.strip().strip("/") for line in content.splitlines()]

        missing = [pattern for pattern in IGNORED_PATTERNS if pattern not in existing]
        if not missing:
            LOG.debug("%s already ignores the Amplify artifacts", self._gitignore_path)
            return []

        if content and not content.endswith("\n"):
            content += "\n"
        self._gitignore_path.write_text(
            content + "\n".join([SECTION_COMMENT] + missing) + "\n", encoding="utf-8"
        )
        return missing
