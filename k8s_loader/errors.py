"""
errors.py
Every failure ends the interactive session. Nothing here is retried.
"""


class LoaderError(Exception):
    """Base class for errors that stop the interactive flow."""


class KubectlError(LoaderError):
    """A kubectl invocation exited non-zero or wrote to stderr."""

    def __init__(self, command: list, message: str):
        self.command = command
        self.message = message.strip()
        super().__init__(self.message or f"Command failed: {' '.join(command)}")


class NoServicesError(LoaderError):
    def __init__(self):
        super().__init__("No services found.")


class InvalidSelectionError(LoaderError):
    """User typed something that is not one of the offered choices."""


class MissingEnvironmentError(LoaderError):
    def __init__(self, service: str, environment: str):
        self.service = service
        self.environment = environment
        super().__init__(
            f'The selected environment "{environment}" does not exist for the '
            f'service "{service}". Please run the script again and choose a '
            "valid environment."
        )
