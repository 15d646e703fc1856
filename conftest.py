"""
PyTest configuration and fixtures for the Departure Timetable Optimizer.

This module provides shared test fixtures: the API test client, small
optimizer settings, and arrival data used across the test suite.
"""

import os
import sys
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Add project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from main import app
from src.core.config import settings
from src.timetable.arrivals import ArrivalModel
from src.timetable.genome import DepartureSchedule
from src.timetable.models import ArrivalSample, Station


# Override settings for testing
settings.environment = "testing"
settings.logfire_environment = "testing"
settings.optimizer_generations = 3
settings.optimizer_population_size = 8
settings.optimizer_random_seed = 42


SAMPLE_ARRIVALS_CSV = (
    "A,7:00,20\n"
    "A,7:05,35\n"
    "B,7:10,12\n"
    "C,7:21,8\n"
    "A,7:30,40\n"
    "B,7:45,25\n"
    "C,8:10,30\n"
    "A,9:00,15\n"
)


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_csv() -> bytes:
    """A small arrival file covering every boarding station."""
    return SAMPLE_ARRIVALS_CSV.encode("utf-8")


@pytest.fixture
def sample_arrivals() -> ArrivalModel:
    """Arrival model matching sample_csv."""
    return ArrivalModel([
        ArrivalSample(Station.A, 0, 20),
        ArrivalSample(Station.A, 5, 35),
        ArrivalSample(Station.B, 10, 12),
        ArrivalSample(Station.C, 21, 8),
        ArrivalSample(Station.A, 30, 40),
        ArrivalSample(Station.B, 45, 25),
        ArrivalSample(Station.C, 70, 30),
        ArrivalSample(Station.A, 120, 15),
    ])


@pytest.fixture
def empty_arrivals() -> ArrivalModel:
    """A day without passengers."""
    return ArrivalModel([])


@pytest.fixture
def seed_genome(sample_arrivals) -> DepartureSchedule:
    """The seed timetable over the sample arrivals."""
    return DepartureSchedule(sample_arrivals)
