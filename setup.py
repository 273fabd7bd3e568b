from setuptools import setup, find_packages

setup(
    name="json-mapping",
    version="0.1.0",
    description="Apply a declarative YAML schema to JSON documents",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "pyyaml>=6.0",
        "jq>=1.3",
        "typer>=0.9",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": ["jsonmapping=jsonmapping.cli:app"],
    },
)
