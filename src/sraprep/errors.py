"""
Exceptions raised by sraprep.

Environment problems and empty results are fatal and carry a message meant
for the user. Failures of the external tools themselves are left as
subprocess.CalledProcessError.
"""


class SraPrepError(Exception):
    """Base class for all documented sraprep failures."""


class EnvironmentSetupError(SraPrepError):
    """The conda environment, emulated install or conda itself is missing."""


class ToolNotFoundError(EnvironmentSetupError):
    """A required command-line tool is not on the environment PATH."""

    def __init__(self, tool: str, package: str = None, env_name: str = None):
        self.tool = tool
        self.package = package
        self.env_name = env_name
        message = f"'{tool}' not found."
        if env_name and package:
            message += (f" Please ensure the '{env_name}' environment is set up "
                        f"correctly with {package}.")
        elif package:
            message += f" Please install {package}."
        super().__init__(message)


class NoAccessionsError(SraPrepError):
    """No run accessions were found for a project."""


class EmptyManifestError(SraPrepError):
    """No forward/reverse pairs were found, or the manifest did not materialize."""
