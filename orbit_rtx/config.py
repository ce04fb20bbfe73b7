"""Configuration read from environment variables."""

import os
from pathlib import Path

# Image settings
RESOLUTION = tuple(map(int, os.getenv("RTX_RESOLUTION", "400,300").split(",")))
FOV = float(os.getenv("RTX_FOV", "60"))  # degrees

# Paths
OUTPUT_DIR = Path(os.getenv("RTX_OUTPUT_DIR", "output"))

# Number of render processes, 1 renders in the calling process
WORKERS = int(os.getenv("RTX_WORKERS", "1"))

# Logging settings
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
# Rotating log file, unset logs to the console only
LOG_FILE = os.getenv("RTX_LOG_FILE") or None

__all__ = [
    "RESOLUTION",
    "FOV",
    "OUTPUT_DIR",
    "WORKERS",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FILE",
]
