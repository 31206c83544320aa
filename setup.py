"""Packaging for the peqtune parametric EQ core."""
from __future__ import annotations

from setuptools import find_packages, setup

setup(
    name="peqtune",
    version="0.1.0",
    description="Parametric EQ band math, response curves and profile codec",
    packages=find_packages(include=["peqtune", "peqtune.*"]),
    python_requires=">=3.11",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": [
            "pytest",
            "hypothesis",
        ],
    },
    entry_points={
        "console_scripts": [
            "peqtune=peqtune.cli:main",
        ],
    },
)
