"""Setup config for the pssmap namespace package."""
from setuptools import find_namespace_packages, setup

setup(
    name='pssmap',
    version='1.0.0',
    url='https://github.com/se-sic/pssmap',
    packages=find_namespace_packages(include=['pssmap', 'pssmap.*']),
    tests_require=["pytest", "pytest-cov"],
    extras_require={
        "test": ["pytest>=7.0", "pytest-cov>=4.0"],
    },
    install_requires=[
        "benchbuild>=6.8",
        "click>=8.1.3",
        "pandas>=1.5.3",
        "plumbum>=1.6",
        "pyeda>=0.28",
        "PyYAML>=6.0",
        "rich>=12.6",
        "tabulate>=0.9",
    ],
    license="BSD 2-Clause",
    entry_points={
        "console_scripts": ['pss-map = pssmap.tools.driver_mapping:main',]
    },
    python_requires='>=3.9'
)
