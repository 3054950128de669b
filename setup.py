import re
from pathlib import Path

from setuptools import setup, find_packages

VERSION_FILE = Path(__file__).parent / "version.py"


def read_version():
    """Read MAJOR.MINOR.PATCH from version.py without importing it."""
    text = VERSION_FILE.read_text(encoding="utf-8")
    parts = {
        name: re.search(rf"^{name} = (\d+)", text, re.MULTILINE).group(1)
        for name in ("MAJOR", "MINOR", "PATCH")
    }
    return f"{parts['MAJOR']}.{parts['MINOR']}.{parts['PATCH']}"


setup(
    name="claude-dashboard-event-logger",
    version=read_version(),
    description="Lifecycle event logger hook feeding the Claude Code agent dashboard",
    author="DazzleML",
    author_email="id+dazzleml@users.noreply.github.com",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "dazzle-filekit>=0.4",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "dashboard-event-logger=dashboard_logger.hook:main",
            "dashboard-events=dashboard_logger.reader:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
)
