"""setuptools packaging for detimer.

Install for development:
    pip install -e ".[test]"
"""

from setuptools import find_packages, setup

setup(
    name="detimer",
    version="0.1.0",
    description="Countdown timer for live streams with sprint/interval cycles",
    packages=find_packages(include=["detimer", "detimer.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.4",
        "numpy>=1.24",
        "colorlog>=6.7",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["detimer=detimer.__main__:run"],
    },
)
