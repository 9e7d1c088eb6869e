"""Configuration loaded from .env"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Data paths
EXERCISES_DIR = Path(os.getenv("EXERCISES_DIR", "exercises"))

# Ollama inference server
OLLAMA_URL = os.getenv("OLLAMA_URL", "http://localhost:11434")
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "qwen2.5:7b")
OLLAMA_TIMEOUT = float(os.getenv("OLLAMA_TIMEOUT", "120"))

# Pause between classification calls so the local server is not flooded
REQUEST_DELAY_SECONDS = float(os.getenv("REQUEST_DELAY_SECONDS", "0.1"))

# Importer progress log cadence
PROGRESS_EVERY = int(os.getenv("PROGRESS_EVERY", "50"))
