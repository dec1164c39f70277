# setup.py
from setuptools import setup, find_packages

setup(
    name="varschema",                 # the *distribution* name on PyPI
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=["pandas"],      # DataFrame row validation
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": ["varschema = varschema.cli:main"],
    },
    description="Declarative, recursive data validation with cross-field variable references",
    author="Your Name",
    license="Creative Commons Attribution-NonCommercial-ShareAlike 4.0 International License",
)
