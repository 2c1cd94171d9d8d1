"""
Setup script for pdfrenderx.

This script configures the package for installation via pip.
Supports both development and production installations.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

setup(
    name="pdfrenderx",
    version="0.1.0",
    description="Turn HTML into linearized, optionally encrypted PDFs using wkhtmltopdf, exiftool and qpdf",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="pdfrenderx Contributors",
    author_email="",
    packages=find_packages(include=["pdfrenderx", "pdfrenderx.*"]),
    install_requires=[
        "pypdf>=3.0.0",
        "click>=8.0.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pdfrenderx=pdfrenderx.cli:cli",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Office/Business",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: POSIX",
        "Environment :: Console",
    ],
    keywords="pdf html wkhtmltopdf exiftool qpdf encrypt linearize metadata cli",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
)
