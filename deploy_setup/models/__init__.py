"""
deploy-setup Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .results import (
    ValidationResult,
    ExecutionResult,
    SSHResult,
    GeneratedFile,
    DNSStatus,
    DNSCheckResult,
    RunOutcome,
    WorkflowRun,
    VerificationResult,
)
from .project import (
    ProjectType,
    Language,
    DetectionResult,
    ServerConfig,
    DomainConfig,
    BranchConfig,
    ProjectSettings,
    CollectedConfig,
    is_valid_project_name,
)
from .store import (
    ProjectRecord,
    GlobalConfig,
)

__all__ = [
    # Results
    "ValidationResult",
    "ExecutionResult",
    "SSHResult",
    "GeneratedFile",
    "DNSStatus",
    "DNSCheckResult",
    "RunOutcome",
    "WorkflowRun",
    "VerificationResult",
    # Project
    "ProjectType",
    "Language",
    "DetectionResult",
    "ServerConfig",
    "DomainConfig",
    "BranchConfig",
    "ProjectSettings",
    "CollectedConfig",
    "is_valid_project_name",
    # Store
    "ProjectRecord",
    "GlobalConfig",
]
