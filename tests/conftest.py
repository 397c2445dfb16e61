"""
Pytest configuration and shared fixtures for simple_utilities tests.
"""

import pytest
from faker import Faker

fake = Faker()


@pytest.fixture
def sample_data():
    """Provide sample data for tests."""
    return {
        "name": fake.name(),
        "email": fake.email(),
        "company": fake.company(),
    }


@pytest.fixture
def users():
    """A small list of user dicts with distinct ages and roles."""
    return [
        {"name": fake.first_name(), "age": 17, "role": "guest"},
        {"name": fake.first_name(), "age": 25, "role": "admin"},
        {"name": fake.first_name(), "age": 40, "role": "editor"},
    ]


@pytest.fixture
def storage_dir(tmp_path):
    directory = tmp_path / "storage"
    directory.mkdir()
    return directory
