from setuptools import setup, find_packages

setup(
    name="transaction_serde",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pandas>=1.5",
        "numpy",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-dependency",
        ],
    },
    entry_points={
        "console_scripts": [
            "transaction-serde=transaction_serde.cli:main",
        ],
    },
    description="Convert financial transactions between CSV, JSON and QIF, with field mapping guesses",
    python_requires=">=3.8",
)
