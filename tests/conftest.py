"""
Shared test fixtures.

Sets up an isolated test database so tests never touch
the real database, and a fake payment gateway so tests
never talk to Stripe.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from league_registry.config import Settings, get_settings
from league_registry.errors import GatewayUnavailable
from league_registry.main import app
from league_registry.models.base import Base, get_db
from league_registry.models.team import RosterEntry
from league_registry.services.payment_gateway import GatewayIntent, get_payment_gateway
from league_registry.services.program_catalog import ProgramCatalog
from league_registry.services.registration_ledger import RegistrationLedger
from league_registry.services.roster_service import RosterService
from league_registry.schemas.program import ProgramCreate
from league_registry.schemas.registration import RegistrationCreate
from league_registry.schemas.roster import PlayerCreate, TeamCreate


# SQLite keeps the suite free of database infrastructure.
# It has no row locks, so concurrency is not exercised here.
TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class FakeGateway:
    """
    In-memory stand-in for Stripe.

    Intents start out waiting for a payment method; a test
    marks one succeeded to simulate the browser completing it.
    """

    def __init__(self):
        self.intents: dict[str, GatewayIntent] = {}
        self.available = True
        self._counter = 0

    def create_intent(self, amount, currency, metadata):
        self._check_available()
        self._counter += 1
        intent_id = f"pi_test_{self._counter}"
        intent = GatewayIntent(
            id=intent_id,
            status="requires_payment_method",
            amount=amount,
            currency=currency,
            client_secret=f"{intent_id}_secret",
            metadata=dict(metadata),
        )
        self.intents[intent_id] = intent
        return intent

    def retrieve_intent(self, intent_id):
        self._check_available()
        intent = self.intents.get(intent_id)
        if intent is None:
            return GatewayIntent(
                id=intent_id, status="not_found",
                amount=Decimal("0"), currency="",
            )
        return intent

    def succeed(self, intent_id):
        self.intents[intent_id].status = "succeeded"

    def add_succeeded(self, intent_id, amount, registration_id=None):
        """An intent completed on the gateway that we never created locally."""
        metadata = {}
        if registration_id is not None:
            metadata["registration_id"] = str(registration_id)
        self.intents[intent_id] = GatewayIntent(
            id=intent_id, status="succeeded", amount=amount,
            currency="usd", metadata=metadata,
        )

    def _check_available(self):
        if not self.available:
            raise GatewayUnavailable("Payment gateway is unavailable, please retry")


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def client(db_session, fake_gateway):
    """
    Provide a test client with the test database and fake gateway.

    The app shares the test's session, so rows created through
    the factory fixtures are visible to the API and vice versa.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_gateway] = lambda: fake_gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def operator_key(client):
    """Turn on the operator credential check with a known key."""
    settings = Settings()
    settings.API_KEY = "test-operator-key"
    app.dependency_overrides[get_settings] = lambda: settings
    return settings.API_KEY


# --- Factories ---

@pytest.fixture
def make_program(db_session):
    """
    Create a program whose registration window is open now
    unless the offsets say otherwise.
    """
    def _make(
        name="Spring League",
        fee=Decimal("150.00"),
        capacity=None,
        opens_in=timedelta(days=-1),
        closes_in=timedelta(days=7),
        is_active=True,
    ):
        now = datetime.utcnow()
        close_at = now + closes_in
        program = ProgramCatalog(db_session).create_program(ProgramCreate(
            name=name,
            fee=fee,
            capacity=capacity,
            registration_open_at=now + opens_in,
            registration_close_at=close_at,
            starts_at=close_at + timedelta(days=1),
            ends_at=close_at + timedelta(days=90),
            is_active=is_active,
        ))
        db_session.commit()
        return program
    return _make


@pytest.fixture
def make_player(db_session):
    def _make(
        first_name="Alex",
        last_name="Morgan",
        organization="Northside FC",
        **fields,
    ):
        player = RosterService(db_session).create_player(PlayerCreate(
            first_name=first_name,
            last_name=last_name,
            organization=organization,
            **fields,
        ))
        db_session.commit()
        return player
    return _make


@pytest.fixture
def make_registration(db_session):
    def _make(player, program, notes=None):
        registration = RegistrationLedger(db_session).create(RegistrationCreate(
            player_id=player.id, program_id=program.id, notes=notes,
        ))
        db_session.commit()
        return registration
    return _make


@pytest.fixture
def make_team(db_session):
    def _make(name="Blue Hawks", organization="Northside FC", **fields):
        team = RosterService(db_session).create_team(TeamCreate(
            name=name, organization=organization, **fields,
        ))
        db_session.commit()
        return team
    return _make


@pytest.fixture
def make_roster_entry(db_session):
    """
    Insert a roster entry directly.

    Bypasses the start-date rule so tests can build rosters
    with history (entries that began or ended in the past).
    """
    def _make(team, player, start_date=None, end_date=None,
              jersey_number=None, position=None):
        entry = RosterEntry(
            team_id=team.id,
            player_id=player.id,
            start_date=start_date or date.today() - timedelta(days=30),
            end_date=end_date,
            jersey_number=jersey_number,
            position=position,
        )
        db_session.add(entry)
        db_session.commit()
        return entry
    return _make
