#!/usr/bin/env python3
"""
Setup script for advancedconfig package.
"""

from setuptools import setup, find_packages

setup(
    name="advancedconfig",
    version="0.1.0",
    description="YAML config files bound to plugin settings records, with comments kept across reloads",
    author="advancedconfig Team",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
)
