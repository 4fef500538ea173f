[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ssmchannel"
version = "0.1.0"
description = "Binary client messages, handshake payloads and retry strategies for session data channels"
requires-python = ">=3.10"
dependencies = []
keywords = ["session", "data channel", "binary framing", "protocol", "retry", "handshake"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ssmchannel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
