[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lorachat"
version = "0.1.0"
description = "Encrypted two-party chat over a packet radio link, with a touchscreen chat screen model"
requires-python = ">=3.10"
keywords = ["lora", "chat", "chacha20", "touchscreen", "keyboard"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Communications :: Chat",
]
dependencies = [
    "pycryptodome",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["lorachat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
