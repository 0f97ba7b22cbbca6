"""Shared fixtures."""

import pytest

from courseboard.services import CourseBoardService


@pytest.fixture
def service():
    return CourseBoardService()


@pytest.fixture
def strict_service():
    return CourseBoardService(strict_references=True)
