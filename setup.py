"""setuptools setup for focusterm.

Install for development:
    pip install -e ".[test]"
    pytest
"""

from setuptools import find_packages, setup

setup(
    name="focusterm",
    version="0.1.0",
    description="Focus/break countdown timer for the terminal",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.4",
        "rich>=13.0",
        "platformdirs>=3.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "focusterm=focusterm.__main__:main",
        ],
    },
)
