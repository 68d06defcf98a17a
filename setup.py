#!/usr/bin/env python
# -*- encoding: utf-8 -*-

"""Setup Module for Prefill"""

import io
import re
from os.path import dirname, join

from setuptools import find_packages, setup


def read(*names, **kwargs):
    """Helper method to read files"""
    return io.open(
        join(dirname(__file__), *names),
        encoding=kwargs.get("encoding", "utf8"),
    ).read()


install_requires = [
    "python-dateutil>=2.8.2",
]

testing_requires = [
    "mock==5.1.0",
    "pytest-cov>=4.1.0",
    "pytest-mock==3.12.0",
    "pytest>=7.4.3",
]

types_requires = [
    "types-mock>=0.1.3",
    "types-python-dateutil>=0.1.6",
]

dev_requires = (
    types_requires
    + testing_requires
    + [
        "black>=23.11.0",
        "coverage>=7.3.2",
        "isort>=5.12.0",
        "nox>=2023.4.22",
        "pre-commit>=2.16.0",
    ]
)

setup(
    name="prefill",
    version="0.1.0",
    license="BSD 3-Clause License",
    description="Declarative default values for unset fields",
    long_description="%s\n%s"
    % (
        read("README.rst"),
        re.sub(":[a-z]+:`~?(.*?)`", r"``\1``", read("CHANGELOG.rst")),
    ),
    long_description_content_type="text/x-rst",
    packages=find_packages("src"),
    package_dir={"": "src"},
    include_package_data=True,
    zip_safe=False,
    python_requires=">=3.11",
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Software Development :: Libraries",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords=["defaults", "initialization", "fields", "type conversion"],
    install_requires=install_requires,
    extras_require={
        "test": testing_requires,
        "tests": testing_requires,
        "testing": testing_requires,
        "dev": dev_requires,
        "all": dev_requires,
    },
)
