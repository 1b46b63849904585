"""Shared pytest fixtures for savetrack tests."""

import tempfile
import os
from datetime import date, timedelta
from decimal import Decimal
import pytest

from savetrack.database.factories import create_sqlite_database
from savetrack.domain.account import AccountService
from savetrack.domain.analytics import AnalyticsService
from savetrack.domain.goal import GoalService
from savetrack.domain.milestone import MilestoneService
from savetrack.domain.progress import ProgressService
from savetrack.domain.projection import ProjectionService

USER = "alice"
OTHER_USER = "bob"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def goal_service(temp_db):
    """Create a GoalService with a temporary database."""
    return GoalService(temp_db)


@pytest.fixture
def progress_service(temp_db):
    """Create a ProgressService with a temporary database."""
    return ProgressService(temp_db)


@pytest.fixture
def milestone_service(temp_db):
    """Create a MilestoneService with a temporary database."""
    return MilestoneService(temp_db)


@pytest.fixture
def projection_service(temp_db):
    """Create a ProjectionService with a temporary database."""
    return ProjectionService(temp_db)


@pytest.fixture
def analytics_service(temp_db):
    """Create an AnalyticsService with a temporary database."""
    return AnalyticsService(temp_db)


@pytest.fixture
def future_date():
    """A target date one year out."""
    return date.today() + timedelta(days=365)


@pytest.fixture
def sample_account(account_service):
    """Create an empty savings account for USER."""
    account_id = account_service.create_account(USER, name="Savings", balance=Decimal("0.00"))
    return account_service.get_account(account_id, USER)


@pytest.fixture
def sample_goal(goal_service, sample_account, future_date):
    """Create a 1000.00 goal on the sample account."""
    return goal_service.create_goal(
        USER,
        account_id=sample_account.id,
        name="Emergency Fund",
        target_amount=Decimal("1000.00"),
        target_date=future_date,
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
