"""
Exceptions raised while creating a new Amplify project
"""

from ampx.commands.exceptions import AmplifyUserError


class ProjectCreationError(AmplifyUserError):
    fmt = "An unspecified error occurred"
    resolution_fmt = "Check the error above and try again."

    def __init__(self, wrapped_from=None, **kwargs):
        self.kwargs = kwargs
        super().__init__(
            type(self).__name__,
            message=self.fmt.format(**kwargs),
            resolution=self.resolution_fmt.format(**kwargs),
            wrapped_from=wrapped_from,
        )


class ProjectDirectoryExistsError(ProjectCreationError):
    fmt = "An Amplify backend definition already exists at {backend_dir}."
    resolution_fmt = "Remove {backend_dir} or choose a different project root, then re-run create-amplify."


class GenerateProjectFilesFailedError(ProjectCreationError):
    fmt = "An error occurred while generating the project files in {project_root}: {provider_error}"


class PackageManagerError(ProjectCreationError):
    fmt = "{package_manager} failed while running '{command}'."
    resolution_fmt = "Check the {package_manager} output above, fix the problem and re-run create-amplify."
