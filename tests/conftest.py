"""Pytest configuration and shared fixtures."""

import pytest

from movieday.domain.models import Film, Screening


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def morning_clash_films():
    """Two films competing for the morning: a G title and an R title."""
    return [
        Film(
            title="A",
            rating="G",
            duration="1 hour, 30 minutes",
            screenings=(Screening("1", ("10:00 AM", "2:00 PM")),),
        ),
        Film(
            title="B",
            rating="R",
            duration="2 hours, 0 minutes",
            screenings=(Screening("2", ("10:15 AM",)),),
        ),
    ]


@pytest.fixture
def listings_raw():
    return {
        "2025-03-01": [
            {
                "title": "Paddington Returns",
                "poster": "https://example.org/p.jpg",
                "rating": "PG",
                "duration": "1 hour, 45 minutes",
                "genres": "Family | Comedy",
                "screenings": [
                    {"screen": "Screen 3", "times": ["10:00 AM", "1:30 PM", "7:00 PM"]},
                ],
            },
            {
                "title": "Night Shift",
                "poster": "",
                "rating": "R",
                "duration": "2 hours, 10 minutes",
                "genres": "Thriller",
                "screenings": [
                    {"screen": "UltraScreen DLX", "times": ["11:00 AM", "8:15 PM"]},
                ],
            },
            {
                "title": "Star Harbor",
                "poster": "",
                "rating": "PG-13",
                "duration": "2 hours, 20 minutes",
                "genres": "Sci-Fi",
                "screenings": [
                    {"screen": "Screen 1", "times": ["2:15 PM", "9:00 PM"]},
                    {"screen": "Screen 5", "times": ["3:00 PM"]},
                ],
            },
        ],
        "2025-03-02": [],
    }
