"""
Sooner - personal task tracking backend

Components:
- config.py: Settings from args/sooner.yaml and environment
- logging_config.py: structlog setup
- errors.py: Error taxonomy shared by all layers
- accounts.py: Signup, signin and profile operations
- backend/: FastAPI application, routes and the JSON document store
- security/: Password hashing, identity tokens, identity resolution
- tasks/: Task query pipeline and task mutations
- assistant/: Reasoning-service adapter that picks tasks for a user

Usage:
    uvicorn sooner.backend.main:app --host 127.0.0.1 --port 3000
"""

from pathlib import Path

__version__ = "0.1.0"

# Path constants
PROJECT_ROOT = Path(__file__).parent.parent
ARGS_DIR = PROJECT_ROOT / "args"
DATA_DIR = PROJECT_ROOT / "data"
CONFIG_PATH = ARGS_DIR / "sooner.yaml"

__all__ = [
    "ARGS_DIR",
    "CONFIG_PATH",
    "DATA_DIR",
    "PROJECT_ROOT",
    "__version__",
]
