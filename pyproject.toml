[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coevent"
version = "0.1.0"
description = "Event-loop driven coroutine tasks with channels, mutexes, select and a worker thread pool"
requires-python = ">=3.10"
dependencies = []
keywords = ["coroutine", "event loop", "channel", "mutex", "thread pool", "eventfd"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["coevent"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
