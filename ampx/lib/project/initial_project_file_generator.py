"""
Renders the initial backend definition of a new project from the packaged cookiecutter template
"""

import logging
from pathlib import Path

from cookiecutter.exceptions import CookiecutterException
from cookiecutter.main import cookiecutter

from ampx.lib.project.exceptions import GenerateProjectFilesFailedError
from ampx.lib.project.project_root_validator import BACKEND_DIR_NAME

LOG = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates" / "cookiecutter-amplify-backend"


class InitialProjectFileGenerator:
    def __init__(self, project_root: str, template: Path = TEMPLATE_DIR):
        self._project_root = project_root
        self._template = template

    def generate_initial_project_files(self) -> Path:
        """
        Bakes the template into <project_root>/amplify

        Raises
        ------
        GenerateProjectFilesFailedError
            If the process of baking the template fails
        """
        params = {
            "template": str(self._template),
            "output_dir": self._project_root,
            "no_input": True,
            "extra_context": {"backend_dir": BACKEND_DIR_NAME},
        }
        LOG.debug("Baking the backend template with cookiecutter: %s", params)
        try:
            return Path(cookiecutter(**params))
        except (CookiecutterException, OSError) as ex:
            raise GenerateProjectFilesFailedError(
                wrapped_from=ex, project_root=self._project_root, provider_error=ex
            ) from ex
