# tests/conftest.py
import os
import tempfile

# Settings are read at import time, so the environment has to be in place first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "0"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="foodchef-logs-")
os.environ["API_KEYS"] = "food_chef_api_2024,mobile_app_key"
os.environ["ADMIN_API_KEYS"] = "admin_api_key"
os.environ["ADMIN_EMAIL"] = "info@foodchef.com"
os.environ["TOTAL_TABLES"] = "20"
os.environ.pop("SMTP_HOST", None)
os.environ.pop("TELEGRAM_BOT_TOKEN", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from foodchef.core.database import Base, get_db
from foodchef.core.gateway import Db
from foodchef.models.sql_models import About, Food, MenuCategory, TeamMember

CLIENT_KEY = "food_chef_api_2024"
ADMIN_KEY = "admin_api_key"


class FakeNotifier:
    """Collects messages instead of sending them."""

    def __init__(self, result=True):
        self.sent = []
        self.result = result

    def send(self, recipient, subject, body_html):
        self.sent.append({"recipient": recipient, "subject": subject, "body": body_html})
        return self.result


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def db(session):
    return Db(session)


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def staff_notifier():
    return FakeNotifier()


@pytest.fixture
def menu(session):
    """Two dishes on the menu and one withdrawn; returns their ids by name."""
    mains = MenuCategory(name="Main Course", sort_order=2)
    desserts = MenuCategory(name="Desserts", sort_order=3)
    session.add_all([mains, desserts])
    session.flush()

    foods = {
        "burger": Food(category_id=mains.id, name="Beef Burger", price=15.99, is_active=True),
        "cake": Food(category_id=desserts.id, name="Chocolate Cake", price=12.50, is_active=True),
        "soup": Food(category_id=mains.id, name="Old Soup", price=5.00, is_active=False),
    }
    session.add_all(foods.values())
    session.add(About(title="About Food Chef Cafe", content="Since 2010", status=True))
    session.add_all([
        TeamMember(name="Ada", position="Head Chef", position_order=1, status=True),
        TeamMember(name="Bo", position="Sous Chef", position_order=2, status=True),
        TeamMember(name="Cy", position="Former Chef", position_order=3, status=False),
    ])
    session.commit()
    return {name: food.id for name, food in foods.items()}


@pytest.fixture
def client(session, notifier, staff_notifier):
    from main import app
    from foodchef.api.deps import get_customer_notifier, get_staff_notifier

    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_customer_notifier] = lambda: notifier
    app.dependency_overrides[get_staff_notifier] = lambda: staff_notifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth(key=CLIENT_KEY):
    return {"Authorization": f"Bearer {key}"}
