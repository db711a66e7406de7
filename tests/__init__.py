"""
DoseTrack Test Suite
====================

This package contains all tests for the DoseTrack medication adherence service.

Test Structure:
- test_services/: adherence engine, stores and intake workflow
- test_api/: API endpoint tests for FastAPI routes
- conftest.py: Shared pytest fixtures

Running Tests:
    # Run all tests
    pytest

    # Run specific test module
    pytest tests/test_services/

    # Run only marked tests
    pytest -m "unit"
    pytest -m "api"
"""
