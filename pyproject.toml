[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "salessvc"
version = "0.0.1"
description = "Structured JSON logging with level events, a sales service entry point and a log formatter."
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "structured-logging", "json", "logfmt", "service"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sales = "salessvc.sales:main"
logfmt = "salessvc.logfmt:main"

[tool.hatch.build.targets.wheel]
packages = ["salessvc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
