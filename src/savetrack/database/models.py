"""SQLAlchemy models for savetrack database."""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Boolean,
    UniqueConstraint,
    TypeDecorator,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class DecimalString(TypeDecorator):
    """Fixed-point decimal persisted as its string form.

    Keeps exact Decimal values on backends without a native decimal type.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value: Optional[Decimal], dialect) -> Optional[str]:
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value: Optional[str], dialect) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(value)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Account(Base):
    """Financial account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    balance = Column(DecimalString, nullable=False, default=Decimal("0.00"))
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_account_user_name"),)

    # Relationships
    goals = relationship("SavingsGoal", back_populates="account", cascade="all, delete-orphan")


class SavingsGoal(Base):
    """Savings goal model."""

    __tablename__ = "savings_goals"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    category_id = Column(Integer, nullable=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    target_amount = Column(DecimalString, nullable=False)
    current_amount = Column(DecimalString, nullable=False)
    initial_balance = Column(DecimalString, nullable=False)
    target_date = Column(Date, nullable=False)
    priority = Column(Integer, nullable=False, default=5)
    status = Column(String, nullable=False, default="active")
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="goals")
    milestones = relationship(
        "GoalMilestone",
        back_populates="goal",
        cascade="all, delete-orphan",
        order_by="GoalMilestone.percentage",
    )
    history = relationship(
        "GoalProgressHistory", back_populates="goal", cascade="all, delete-orphan"
    )


class GoalMilestone(Base):
    """Goal milestone model."""

    __tablename__ = "goal_milestones"

    id = Column(Integer, primary_key=True)
    goal_id = Column(Integer, ForeignKey("savings_goals.id"), nullable=False)
    user_id = Column(String, nullable=False, index=True)
    percentage = Column(Integer, nullable=False)
    target_amount = Column(DecimalString, nullable=False)
    achieved_amount = Column(DecimalString, nullable=True)
    achieved_at = Column(DateTime, nullable=True)
    is_achieved = Column(Boolean, default=False, nullable=False)
    notified = Column(Boolean, default=False, nullable=False)

    __table_args__ = (UniqueConstraint("goal_id", "percentage", name="uq_goal_percentage"),)

    # Relationships
    goal = relationship("SavingsGoal", back_populates="milestones")


class GoalProgressHistory(Base):
    """Goal progress history model. Rows are only ever inserted."""

    __tablename__ = "goal_progress_history"

    id = Column(Integer, primary_key=True)
    goal_id = Column(Integer, ForeignKey("savings_goals.id"), nullable=False, index=True)
    user_id = Column(String, nullable=False)
    previous_amount = Column(DecimalString, nullable=False)
    new_amount = Column(DecimalString, nullable=False)
    change_amount = Column(DecimalString, nullable=False)
    account_balance = Column(DecimalString, nullable=False)
    progress_percentage = Column(DecimalString, nullable=False)
    transaction_id = Column(String, nullable=True)
    recorded_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    goal = relationship("SavingsGoal", back_populates="history")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
