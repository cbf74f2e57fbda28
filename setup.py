# setup.py
from setuptools import setup, find_packages

setup(
    name="capture-page",
    version="0.1.0",
    description="Async client for the capture.page screenshot, PDF, content and metadata API",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
        "yarl>=1.9",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "capture-page=capture_page.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
