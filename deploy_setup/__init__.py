"""deploy-setup - CI/CD configuration generator for deploying to a Linux VPS"""

__version__ = "1.0.0"
