[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sincresample"
version = "0.1.0"
description = "Band-limited sample-rate conversion building blocks: FFTs, windowed-sinc filter design, polyphase, half-band and fast-convolution stages"
requires-python = ">=3.10"
dependencies = []
keywords = ["resampling", "sample-rate", "audio", "fft", "fir", "kaiser", "polyphase"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Conversion",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sincresample"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
