from setuptools import setup, find_packages

setup(
    name="sudokumate",
    version="1.0.0",
    description="Constraint-Propagation Sudoku Solver with Uniqueness Checking & Hints",
    author="robomotic",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "tqdm>=4.62.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "sudokumate=sudokumate.cli:main",
        ],
    },
)
