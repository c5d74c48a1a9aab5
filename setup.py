from setuptools import setup, find_packages

setup(
    name="league_engine",
    version="1.0.0",
    packages=find_packages(include=["league_engine", "league_engine.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.21.0",
        "pandas>=1.3.0",
        "openpyxl>=3.0.0",
        "pydantic>=2.0",
        "httpx>=0.24",
        "tenacity>=8.0",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "league-table=league_engine.cli:main",
        ],
    },
    author="Aaron",
    description="League standings engine with deterministic tie-breaks and match-log recomputation",
)
