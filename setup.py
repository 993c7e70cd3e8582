#!/usr/bin/env python3
"""
Setup script for the rotation skill database.
"""

from setuptools import setup, find_packages

setup(
    name="rotationdb",
    version="0.1.0",
    description="Skill reference database for rotation-tracking tools",
    author="Your Name",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "httpx>=0.24.0",
        "pandas>=1.5.0",
        "mcp[cli]<2"
    ],
    extras_require={
        "tests": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "rotationdb-mcp=rotationdb.mcp_server.server:main",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
