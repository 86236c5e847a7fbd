[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "batchsched"
version = "0.5.0"
description = "A batch scheduling framework driven by a YAML policy, with priority, gang and conformance plugins and node scoring helpers."
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = [
    "scheduler",
    "batch",
    "gang-scheduling",
    "cluster",
    "priority-queue",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Clustering",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["batchsched"]

[tool.hatch.build.targets.sdist]
include = [
    "batchsched",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
