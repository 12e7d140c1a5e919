#
# Copyright 2024 jnipack Project. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

from setuptools import setup, find_packages

ALL_PROGRAM_ENTRIES = ["jnipack = jnipack.cli:main"]

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="jnipack",
    version="0.1.0",
    description="Package prebuilt JNI libraries into Android AAR and JAR SDK artifacts.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="jnipack Project Authors",
    packages=find_packages(include=["jnipack", "jnipack.*"]),
    package_data={
        "jnipack": [
            "template/copier.yml",
            "template/extensions/*.py",
            "template/project/*.jinja",
        ],
    },
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "copier>=9.2.0",
        "copier-templates-extensions>=0.3.0",
        'tomli>=2.0.0; python_version < "3.11"',
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: Implementation :: CPython",
        "Operating System :: POSIX :: Linux",
        "Operating System :: MacOS :: MacOS X",
        "Operating System :: Microsoft :: Windows",
    ],
    zip_safe=False,
    entry_points={"console_scripts": ALL_PROGRAM_ENTRIES},
)
