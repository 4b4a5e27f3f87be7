# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="treemake",
    version="0.1.0",
    description="Generates a Makefile per directory of a C/C++ project tree",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["treemake*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'treemake=treemake.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
