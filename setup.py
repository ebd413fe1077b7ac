"""Setup script for asset_extractor package."""

from setuptools import setup, find_packages

setup(
    name="asset_extractor",
    version="1.0.0",
    description="Content-based page classification and asset extraction for utility work-order PDFs",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pymupdf>=1.23.0",
        "pillow>=9.0.0",
        "openai>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov",
        ],
    },
    entry_points={
        "console_scripts": [
            "asset-extractor=asset_extractor.cli:main",
        ],
    },
)
