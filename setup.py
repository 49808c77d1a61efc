"""Setup configuration for the scenetest runner."""

from setuptools import setup, find_packages

setup(
    name="scenetest",
    version="0.1.0",
    description="Test orchestration for suites embedded in a host application",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pyyaml>=6.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "scenetest=scenetest.cli:main",
        ],
    },
)
