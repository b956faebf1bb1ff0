#!/usr/bin/env python3

import pathlib

from setuptools import find_packages, setup

HERE = pathlib.Path(__file__).parent

try:
    README = (HERE / "README.md").read_text()
except FileNotFoundError:
    README = "File format detection by fixed-offset byte signatures"

setup(
    name="formatdetect",
    version="1.0.0",
    description="File format detection by fixed-offset byte signatures",
    long_description=README,
    long_description_content_type="text/markdown",
    author="Marc Rivero",
    author_email="mriverolopez@gmail.com",
    packages=find_packages(include=["formatdetect", "formatdetect.*"]),
    package_data={"formatdetect": ["data/*.json"]},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.13",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Utilities",
    ],
    python_requires=">=3.10",
    install_requires=[
        "pyfiglet>=0.8.post1",
        "rich>=13.7.0",
        "click>=8.1.7",
        "psutil>=5.9.0",
        "pydantic>=2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "formatdetect=formatdetect.cli_main:cli",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
