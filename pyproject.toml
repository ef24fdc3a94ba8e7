[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "crosswind"
version = "0.1.0"
description = "A small application framework for microcontroller-style programs: services, drivers, an event broker, queues, value types and PWM helpers."
requires-python = ">=3.10"
dependencies = []
keywords = ["embedded", "framework", "event-broker", "services", "drivers", "pwm", "queue"]
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
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["crosswind"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
