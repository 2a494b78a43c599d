[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gameaudio"
version = "0.1.0"
description = "Lightweight game audio: signals, mixing, filters and 3D spatialization in pure Python"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "game", "mixer", "spatial audio", "doppler", "dsp", "signal"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gameaudio-demo = "gameaudio.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["gameaudio"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
