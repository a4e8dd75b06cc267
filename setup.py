"""Package dbx-introspect for publishing."""

import os
import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="dbx-introspect",
    version=os.environ.get('DBX_INTROSPECT_VERSION', '0.0.0'),
    author="Timeseer.AI",
    author_email="pypi@timeseer.ai",
    description="Describe the tables of a Databricks SQL warehouse as JSON.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="Apache-2.0",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "License :: OSI Approved :: Apache Software License",
    ],
    packages=setuptools.find_packages(exclude=["tests"]),
    install_requires=[
          'pyodbc',
          'toml',
      ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['dbx-introspect=dbx_introspect.cli:main'],
    },
    python_requires='>=3.8',
)
