#!/usr/bin/env python3
"""Setup configuration for iono-correction package."""

from setuptools import setup, find_packages
from pathlib import Path

# Read long description from README
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text() if readme_path.exists() else ""

setup(
    name="iono-correction",
    version="1.0.0",
    description="Ionospheric media corrections (IRI2007 ray integration, DSN TRK-2-23) for radiometric tracking",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Michael James Hauan",
    author_email="ac0g@arrl.net",
    license="MIT",
    
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    
    python_requires=">=3.9",
    
    install_requires=[
        "numpy>=1.20.0",
        "scipy>=1.7.0",
        "toml>=0.10.0",
    ],
    
    extras_require={
        "iri": ["iri2016>=1.11.0"],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=3.0.0",
        ],
    },
    
    entry_points={
        "console_scripts": [
            "iono-correction=iono_correction.main:main",
        ],
    },
    
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Atmospheric Science",
        "Topic :: Scientific/Engineering :: Astronomy",
    ],
    
    keywords="ionosphere tec iri orbit determination dsn trk-2-23 tracking",
)
