"""
deploy-setup Exception Hierarchy

Clean exception hierarchy for consistent error handling across the CLI.
"""

from typing import Optional

from deploy_setup.constants import ERROR_CACHE_NOT_FOUND


class DeploySetupError(Exception):
    """Base exception for all deploy-setup errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(DeploySetupError):
    """Raised when configuration is invalid or missing."""

    pass


class ValidationError(DeploySetupError):
    """Raised when a collected or loaded configuration breaks an invariant."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("Invalid configuration", context="; ".join(errors))


class DeploymentError(DeploySetupError):
    """Raised when deployment operations fail."""

    pass


class SSHError(DeploySetupError):
    """Raised when SSH operations fail."""

    pass


class SecretError(DeploySetupError):
    """Raised when secret operations fail."""

    pass


class GitHubCLIError(DeploySetupError):
    """Raised when a gh invocation fails or returns unusable output."""

    pass


class CacheNotFoundError(ConfigurationError):
    """Raised when a standalone command runs before init."""

    def __init__(self, project_dir: str):
        self.project_dir = project_dir
        message = ERROR_CACHE_NOT_FOUND.format(path=project_dir)
        context = "Run: deploy-setup init"
        super().__init__(message, context)


class TemplateNotFoundError(ConfigurationError):
    """Raised when a template stub is missing from the package."""

    def __init__(self, template_path: str):
        self.template_path = template_path
        super().__init__(f"Template not found: {template_path}")
