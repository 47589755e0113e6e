[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "ctrlide"
version = "1.0.0"
description = "A small desktop IDE for laying out controller projects and configuring DI/DO module channels"
requires-python = ">=3.10"
dependencies = []
keywords = ["controller", "plc", "digital-io", "ide", "configuration", "tkinter"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: Developers",
    "Intended Audience :: Manufacturing",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ctrlide = "ctrlide.gui:main"

[tool.setuptools.packages.find]
include = ["ctrlide*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
