from setuptools import setup, find_packages

setup(
    name="namefmt",
    version="1.0.0",
    description="Normalize filenames across a directory tree into a consistent naming convention",
    author="Ashwin Nair",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "PyYAML>=6.0",
        "tomli>=2.0",
        "rich>=13.0",
        "tqdm>=4.60",
        "argcomplete>=3.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "namefmt = apps.cli:main"
        ],
    },
)
