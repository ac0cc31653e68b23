"""SQLAlchemy models for spendboard database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Project(Base):
    """Project model."""

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    description = Column(String, nullable=True)
    client = Column(String, nullable=True)
    status = Column(String, default="active", nullable=False)
    budget = Column(Numeric(12, 2), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    expenses = relationship("Expense", back_populates="project")
    revenues = relationship("Revenue", back_populates="project")


class Category(Base):
    """Expense category (expense type) model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    code = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    expenses = relationship("Expense", back_populates="category")


class Supplier(Base):
    """Supplier model."""

    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    expenses = relationship("Expense", back_populates="supplier")


class Expense(Base):
    """Expense model."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    expense_date = Column(Date, nullable=False)
    description = Column(String, nullable=True)
    invoice_reference = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    project = relationship("Project", back_populates="expenses")
    category = relationship("Category", back_populates="expenses")
    supplier = relationship("Supplier", back_populates="expenses")


class Revenue(Base):
    """Revenue model."""

    __tablename__ = "revenues"

    id = Column(Integer, primary_key=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    revenue_date = Column(Date, nullable=False)
    description = Column(String, nullable=True)
    invoice_reference = Column(String, nullable=True)
    payment_status = Column(String, default="pending", nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    project = relationship("Project", back_populates="revenues")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
