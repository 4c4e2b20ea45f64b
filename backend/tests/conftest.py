"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
an in-memory stand-in for RegistrantRepository and service/app fixtures
wired to it.
"""

import copy
from datetime import datetime
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import (
    get_admin_service,
    get_registration_service,
    get_stamp_service,
    reset_container,
)
from modules.admin.service import AdminService
from modules.registration.service import RegistrationService
from modules.stamps.exceptions import StampCardNotFoundError
from modules.stamps.models import StampCard, StampSlot, mark_slot
from modules.stamps.service import StampService
from shared.config import get_settings


TEST_DOMAIN = "https://stamps.example.com"


class InMemoryRegistrantRepository:
    """
    Dict-backed stand-in for RegistrantRepository.

    Mirrors the Firestore repository's method signatures and uses the same
    mark_slot transition, so services behave as they would against the store.
    """

    def __init__(self) -> None:
        self.users: dict[str, dict[str, Any]] = {}
        self.cards: dict[str, dict[str, Any]] = {}
        self.submissions: dict[str, dict[str, Any]] = {}
        self.writes = 0

    def create_registrant(
        self,
        user_id: str,
        user_data: dict[str, Any],
        stamps: list[StampSlot],
        now: datetime,
    ) -> StampCard:
        card = StampCard(user_id=user_id, stamps=stamps, created_at=now, last_updated=now)
        self.users[user_id] = copy.deepcopy(user_data)
        self.cards[user_id] = card.to_document()
        self.writes += 1
        return card

    def find_user_by_field(self, field: str, value: str) -> Optional[tuple[str, dict[str, Any]]]:
        for user_id, data in self.users.items():
            if data.get(field) == value:
                return user_id, copy.deepcopy(data)
        return None

    def get_user(self, user_id: str) -> Optional[dict[str, Any]]:
        data = self.users.get(user_id)
        return copy.deepcopy(data) if data is not None else None

    def get_stamp_card(self, user_id: str) -> Optional[StampCard]:
        data = self.cards.get(user_id)
        return StampCard.model_validate(data) if data is not None else None

    def touch_user(self, user_id: str, now: datetime) -> None:
        self.users[user_id]["lastActive"] = now

    def mark_booth(self, user_id: str, booth_id: str, now: datetime) -> list[StampSlot]:
        card = self.get_stamp_card(user_id)
        if card is None:
            raise StampCardNotFoundError(user_id)
        updated = mark_slot(card.stamps, booth_id, now)
        self.cards[user_id]["stamps"] = [slot.to_document() for slot in updated]
        self.cards[user_id]["lastUpdated"] = now
        self.users[user_id]["lastActive"] = now
        self.writes += 1
        return updated

    def save_submission(self, submission_id: str, data: dict[str, Any]) -> None:
        self.submissions[submission_id] = copy.deepcopy(data)
        self.writes += 1

    def count_documents(self, collection: str) -> int:
        return len({"users": self.users, "stamps": self.cards}.get(collection, {}))

    def list_recent_users(self, limit: int = 10) -> list[tuple[str, dict[str, Any]]]:
        ordered = sorted(
            self.users.items(),
            key=lambda item: item[1].get("createdAt"),
            reverse=True,
        )
        return [(user_id, copy.deepcopy(data)) for user_id, data in ordered[:limit]]

    def probe(self) -> None:
        pass


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and the service container around each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def repository() -> InMemoryRegistrantRepository:
    """Provide an empty in-memory registrant repository."""
    return InMemoryRegistrantRepository()


@pytest.fixture
def stamp_service(repository: InMemoryRegistrantRepository) -> StampService:
    return StampService(repository)


@pytest.fixture
def registration_service(repository: InMemoryRegistrantRepository) -> RegistrationService:
    return RegistrationService(repository, domain=TEST_DOMAIN)


@pytest.fixture
def admin_service(repository: InMemoryRegistrantRepository) -> AdminService:
    return AdminService(repository)


@pytest.fixture
def app(stamp_service, registration_service, admin_service):
    """Create a fresh app wired to the in-memory repository."""
    app = create_app()
    app.dependency_overrides[get_stamp_service] = lambda: stamp_service
    app.dependency_overrides[get_registration_service] = lambda: registration_service
    app.dependency_overrides[get_admin_service] = lambda: admin_service
    return app


@pytest.fixture
def client(app) -> TestClient:
    """Test client for the wired app."""
    return TestClient(app)
