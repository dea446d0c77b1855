[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lidarcore"
version = "0.1.0"
description = "Core data types, wire protocol structures and model helpers for triangle and TOF 2D LiDAR devices"
requires-python = ">=3.10"
dependencies = []
keywords = ["lidar", "laser", "scanner", "protocol", "robotics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lidarcore"]

[tool.pytest.ini_options]
addopts = "-ra"
