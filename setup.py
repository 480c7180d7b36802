#!/usr/bin/env python3

from setuptools import setup, find_packages

setup(
    name="scriptbind",
    version="0.1.0",
    description="Native function and type registration bridge for an embedded script runtime",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "json5",
        "PyYAML",
    ],
    extras_require={
        "dev": ["pytest", "black", "mypy"],
    },
    entry_points={
        "console_scripts": [
            "scriptbind=scriptbind.cli:main",
        ],
    },
)
