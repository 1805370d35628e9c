"""
Setup configuration for kmodsetup.

Installs kmodsetup as a command-line tool.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read version from __init__.py
init_file = Path(__file__).parent / "kmodsetup" / "__init__.py"
version = {}
with open(init_file) as f:
    for line in f:
        if line.startswith("__version__"):
            exec(line, version)
            break

# Read long description from README
readme_file = Path(__file__).parent / "README.md"
long_description = ""
if readme_file.exists():
    with open(readme_file, encoding="utf-8") as f:
        long_description = f.read()

setup(
    name="kmodsetup",
    version=version.get("__version__", "0.1.0"),
    author="kmodsetup Contributors",
    description="Export the installed kernel module version and build the setup project",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.7",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development :: Build Tools",
    ],
    python_requires=">=3.7",
    entry_points={
        "console_scripts": [
            "kmodsetup=kmodsetup.cli:main",
        ],
    },
    keywords="kernel linux modules pacman make build",
)
