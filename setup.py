from __future__ import annotations

from setuptools import find_packages, setup


setup(
    name="nodeunion",
    version="0.1.0",
    description="Union-find connectivity tracking over named nodes.",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=["numpy", "typer>=0.9"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["nodeunion=nodeunion.cli:main"]},
)
