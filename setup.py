from setuptools import setup, find_packages

setup(
    name="firstfix",
    version="1.0.0",
    description="Find beginner-friendly GitHub issues and get a starter kit for one",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "rich>=13.0.0",
        "beautifulsoup4>=4.12.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "firstfix=firstfix.cli:main",
        ],
    },
)
