#!/usr/bin/env python3
"""Setup script for the wwbot package."""

from setuptools import setup, find_packages

setup(
    name="wwbot",
    version="0.1.0",
    description="Werewolf game bot over chat, built on BulletproofCollection",
    python_requires=">=3.8",
    packages=find_packages(where=".", include=["wwbot*"]),
    package_dir={"": "."},
    install_requires=[
        "numpy",
        "pandas",
        "pyyaml",
        "pyee>=9",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
