"""
Result Models

Dataclass models for operation results and command outputs.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)

    def add_error(self, error: str) -> None:
        """Add an error to the validation result."""
        self.errors.append(error)
        self.is_valid = False

    def __repr__(self) -> str:
        return f"ValidationResult(valid={self.is_valid}, errors={len(self.errors)})"


@dataclass
class ExecutionResult:
    """Result of a command execution (subprocess)."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    command: str = ""

    @property
    def is_success(self) -> bool:
        """Check if execution succeeded."""
        return self.returncode == 0

    def __repr__(self) -> str:
        return f"ExecutionResult(returncode={self.returncode}, command='{self.command[:50]}...')"


@dataclass
class SSHResult:
    """Result of a remote script execution."""

    returncode: int
    host: str = ""
    user: str = ""
    duration_seconds: float = 0.0

    def __repr__(self) -> str:
        return f"SSHResult(host={self.host}, returncode={self.returncode}, duration={self.duration_seconds:.2f}s)"


@dataclass
class GeneratedFile:
    """A file written by the generator."""

    path: str
    backed_up: bool = False


class DNSStatus(Enum):
    """Outcome of a DNS check."""

    SKIPPED = "skipped"
    MATCH = "match"
    MISMATCH = "mismatch"
    LOOKUP_FAILED = "lookup_failed"


@dataclass
class DNSCheckResult:
    """Result of resolving the configured domain."""

    status: DNSStatus
    domain: str = ""
    expected_ip: str = ""
    addresses: list[str] = field(default_factory=list)
    error: str = ""


class RunOutcome(Enum):
    """Outcome of waiting for a CI run."""

    SUCCESS = "success"
    FAILURE = "failure"
    TIMEOUT = "timeout"
    UNAVAILABLE = "unavailable"


@dataclass
class WorkflowRun:
    """Latest GitHub Actions run as reported by gh."""

    status: str
    conclusion: str = ""
    name: str = ""

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"


@dataclass
class VerificationResult:
    """Result of the push-then-poll loop."""

    outcome: RunOutcome
    run: Optional[WorkflowRun] = None
    polls: int = 0
