[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "raygames"
version = "0.1.0"
description = "Small arcade games, graphics demos and drawing lessons built on pygame"
requires-python = ">=3.10"
keywords = ["arkanoid", "pong", "arcade", "pygame", "demos", "lessons"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
raygames-arkanoid = "raygames.arkanoid:main"
raygames-ping-pong = "raygames.ping_pong:main"
raygames-ping-pong-v2 = "raygames.ping_pong_v2:main"
raygames-demos = "raygames.demos:main"
raygames-lessons = "raygames.lessons:main"

[tool.hatch.build.targets.wheel]
packages = ["raygames"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
