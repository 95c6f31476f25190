#!/usr/bin/env python3
"""deploy-setup - Setup"""

from setuptools import setup, find_packages

with open("requirements.txt") as f:
    requirements = [line for line in f.read().splitlines() if line and not line.startswith("#")]

setup(
    name="deploy-setup",
    version="1.0.0",
    description="CI/CD configuration generator: git push to deploy on a Linux VPS",
    author="deploy-setup Team",
    packages=find_packages(include=["deploy_setup", "deploy_setup.*"]),
    package_data={
        "deploy_setup": ["stubs/*/*.j2"],
    },
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "deploy-setup=deploy_setup.main:main",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
