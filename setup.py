#!/usr/bin/env python

import io
import re
import os
from setuptools import setup, find_packages


def read(*filenames, **kwargs):
    encoding = kwargs.get("encoding", "utf-8")
    # io.open defaults to \n as universal line ending no matter on what system
    sep = kwargs.get("sep", "\n")
    buf = []
    for filename in filenames:
        with io.open(filename, encoding=encoding) as f:
            buf.append(f.read())
    return sep.join(buf)


def read_requirements(req="base.txt"):
    content = read(os.path.join("requirements", req))
    requirements = list()
    for line in content.split("\n"):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        elif line.startswith("-r"):
            requirements.extend(read_requirements(line[3:]))
        else:
            requirements.append(line)
    return requirements


def read_version():
    content = read(os.path.join(os.path.dirname(__file__), "ampx", "__init__.py"))
    return re.search(r"__version__ = \"([^']+)\"", content).group(1)


setup(
    name="amplify-backend-cli",
    version=read_version(),
    description="Command line tooling to deploy Amplify backends and read the outputs of deployed backends",
    long_description=read("README.md"),
    long_description_content_type="text/markdown",
    license="Apache License 2.0",
    packages=find_packages(exclude=["tests.*", "tests"]),
    keywords="AWS Amplify CLI",
    python_requires=">=3.9, <=4.0, !=4.0",
    entry_points={
        "console_scripts": [
            "ampx=ampx.cli.main:cli",
            "create-amplify=ampx.commands.create.command:cli",
        ]
    },
    install_requires=read_requirements("base.txt"),
    extras_require={"dev": read_requirements("dev.txt")},
    include_package_data=True,
    package_data={
        "ampx.lib.project": ["templates/**/*"],
        "ampx.lib.form_generation": ["templates/*.mustache"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development :: Build Tools",
        "Topic :: Utilities",
    ],
)
