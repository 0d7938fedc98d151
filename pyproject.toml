[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lxutils"
version = "0.1.0"
description = "Small Linux system utilities: lsmem, mcookie, mesg, mountpoint, renice and rev"
requires-python = ">=3.10"
dependencies = []
keywords = ["util-linux", "lsmem", "mcookie", "mesg", "mountpoint", "renice", "rev", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lsmem = "lxutils.lsmem:main"
mcookie = "lxutils.mcookie:main"
mesg = "lxutils.mesg:main"
mountpoint = "lxutils.mountpoint:main"
renice = "lxutils.renice:main"
rev = "lxutils.rev:main"

[tool.hatch.build.targets.wheel]
packages = ["lxutils"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
