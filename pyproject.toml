[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tystnad"
version = "0.1.0"
description = "Keep audio outputs awake by looping short stretches of silence"
requires-python = ">=3.10"
keywords = ["audio", "silence", "wav", "keep-alive", "sound"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: MacOS",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Utilities",
]
dependencies = [
    "platformdirs",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tystnad = "tystnad.app:main"

[tool.hatch.build.targets.wheel]
packages = ["tystnad"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
