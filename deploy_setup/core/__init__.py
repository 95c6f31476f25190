"""
deploy-setup Core

Detection, configuration collection, file generation and push verification.
"""

from .app_type_registry import AppTypeConfig, AppTypeRegistry, TemplateCategory, app_type_registry
from .detector import ProjectDetector, detect_project
from .collector import CollectionCancelled, ConfigCollector, CollectorState, ReviewAction
from .generator import ConfigGenerator, generate_files
from .push_verifier import PushVerifier

__all__ = [
    "AppTypeConfig",
    "AppTypeRegistry",
    "TemplateCategory",
    "app_type_registry",
    "ProjectDetector",
    "detect_project",
    "CollectionCancelled",
    "ConfigCollector",
    "CollectorState",
    "ReviewAction",
    "ConfigGenerator",
    "generate_files",
    "PushVerifier",
]
