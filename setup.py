#!/usr/bin/env python3
"""
MiniJava Front End
A scanner, parser and AST toolkit for the MiniJava teaching language.
"""

from setuptools import setup, find_packages
import os
import sys

# Ensure Python 3.8+
if sys.version_info < (3, 8):
    raise RuntimeError("minijava requires Python 3.8 or later")

# Read version from __init__.py
here = os.path.abspath(os.path.dirname(__file__))
version_file = os.path.join(here, "minijava", "__init__.py")
version = {}
if os.path.exists(version_file):
    with open(version_file) as f:
        for line in f:
            if line.startswith("__version__"):
                exec(line, version)
else:
    version["__version__"] = "0.1.0"

# Read README
readme_file = os.path.join(here, "README.md")
with open(readme_file, "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="minijava",
    version=version.get("__version__", "0.1.0"),
    description="Scanner, parser and AST for the MiniJava language",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        # Core has no external dependencies for from-scratch implementation
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "black>=23.3.0",
            "flake8>=6.0.0",
            "mypy>=1.4.0",
            "isort>=5.12.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "minijava=minijava.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Compilers",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords=[
        "minijava", "compiler", "parser", "lexer", "scanner",
        "recursive-descent", "precedence-climbing", "ast",
    ],
    zip_safe=False,
    platforms=["Windows", "Linux", "macOS"],
)
