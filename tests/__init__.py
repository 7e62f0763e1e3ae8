"""Sooner Test Suite

Test organization:
- unit/: Unit tests for individual modules
  - store/: JSON document store
  - security/: Passwords, tokens, identity resolution
  - accounts/: Signup, signin, profile and capability flags
  - tasks/: Query pipeline and task manager
  - assistant/: Answer parsing, providers, service
  - config/: Settings loading and logging setup
- integration/: API tests through the FastAPI TestClient

Running tests:
    # All tests
    pytest

    # Specific module
    pytest tests/unit/tasks/

    # With coverage
    pytest --cov=sooner --cov-report=term-missing
"""
