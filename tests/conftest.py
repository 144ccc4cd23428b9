from __future__ import annotations

import random

import pytest

from dealdesk.models.enums import Stage, UserRole
from dealdesk.schemas.deals import Deal
from dealdesk.schemas.users import User
from dealdesk.seed_data import USERS
from dealdesk.services.currency import ExchangeRateTable
from dealdesk.services.deal_service import DealService


@pytest.fixture
def users() -> dict[str, User]:
    return {user.id: user for user in USERS}


@pytest.fixture
def sales_rep(users) -> User:
    return users["u1"]


@pytest.fixture
def admin(users) -> User:
    return users["u6"]


@pytest.fixture
def make_deal():
    def _make_deal(deal_id: str = "d1", **overrides) -> Deal:
        fields = {
            "id": deal_id,
            "owner_id": "u1",
            "title": "Enterprise Cloud Migration",
            "company": "Acme Corp",
            "country": "United States",
            "value": 100000,
            "stage": Stage.DISCOVER,
            "contact_name": "John Doe",
        }
        fields.update(overrides)
        return Deal(**fields)

    return _make_deal


@pytest.fixture
def rates() -> ExchangeRateTable:
    return ExchangeRateTable({"EUR": 0.9, "GBP": 0.8, "CLP": 950, "MXN": 17})


@pytest.fixture
def deal_service(make_deal, rates) -> DealService:
    deals = [
        make_deal("1", title="Enterprise Cloud Migration", company="Acme Corp", stage=Stage.UNDERSTAND, value=125000),
        make_deal("2", title="Q3 Marketing Automation", company="Globex Inc", country="United Kingdom", value=45000),
        make_deal("3", owner_id="u2", title="Security Audit 2024", company="Soylent Corp", country="Spain",
                  stage=Stage.PROPOSAL, value=15000),
        make_deal("4", title="Zero Value Pilot", company="Initech", country="Chile", value=0),
    ]
    return DealService(deals, rates, rng=random.Random(7))


@pytest.fixture
def role_user():
    def _role_user(role: UserRole, user_id: str = "x1") -> User:
        return User(id=user_id, name="Test User", email="test@example.com", role=role)

    return _role_user
