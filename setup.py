from setuptools import setup, find_packages

setup(
    name="quill-lang",
    version="0.1.0",
    description="Quill — a tiny call-language compiler (lex, parse, generate)",
    packages=find_packages(include=["quill", "quill.*"]),
    python_requires=">=3.11",
    install_requires=[
        "llvmlite>=0.41.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "hypothesis>=6.84",
        ],
    },
    entry_points={
        "console_scripts": [
            "quill=quill.cli:main",
        ],
    },
)
