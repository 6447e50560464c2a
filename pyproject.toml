[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rmsnet"
version = "0.1.0"
description = "A small TCP remote management service for inspecting and killing processes on a host"
requires-python = ">=3.10"
dependencies = []
keywords = ["remote management", "process monitoring", "tcp", "sysadmin"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rmsnet-server = "rmsnet.server:main"
rmsnet-client = "rmsnet.client:main"

[tool.hatch.build.targets.wheel]
packages = ["rmsnet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
