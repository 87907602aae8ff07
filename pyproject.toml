[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "memscope"
version = "0.1.0"
description = "Physical memory snapshots, x86 page-table translation and kernel structure offsets for memory introspection"
requires-python = ">=3.10"
dependencies = []
keywords = ["memory", "introspection", "forensics", "paging", "x86", "amd64", "page tables"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Debuggers",
    "Topic :: System :: Recovery Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["memscope"]

[tool.pytest.ini_options]
addopts = "-ra"
