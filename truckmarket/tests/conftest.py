from __future__ import annotations

import uuid
from datetime import date, datetime, timedelta, timezone

import pytest

from truckmarket.app import app
from truckmarket.listings.models import Listing
from truckmarket.llm.groq_client import LLMServiceError


def make_listing(**overrides) -> Listing:
    data = {
        "id": str(uuid.uuid4()),
        "origin": "Jakarta",
        "destination": "Surabaya",
        "max_weight": 1000.0,
        "departure_date": date.today() + timedelta(days=7),
        "truck_type": "box",
        "phone_number": "081200000000",
        "price": 2_000_000,
        "created_at": datetime(2026, 10, 1, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return Listing(**data)


class FakeGenerator:
    """Records prompts and returns a canned reply."""

    def __init__(self, reply: str = "Pilih Cargo Cepat Nusantara.") -> None:
        self.reply = reply
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


class FailingGenerator:
    def __init__(self, exc: Exception | None = None) -> None:
        self.exc = exc or LLMServiceError("upstream 503")
        self.calls = 0

    def generate(self, prompt: str) -> str:
        self.calls += 1
        raise self.exc


@pytest.fixture
def override():
    """Set FastAPI dependency overrides for one test and clear them afterwards."""
    def _set(dependency, value):
        app.dependency_overrides[dependency] = lambda: value
    yield _set
    app.dependency_overrides.clear()
