"""
SQLAlchemy-backed pet data provider.

Stores pets in SQLite and serves the candidate pool with the listing
eligibility rules applied (available, approved, not expired).
"""

from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from sqlalchemy import create_engine, Column, DateTime, Float, String, or_
from sqlalchemy.orm import declarative_base, sessionmaker

from similar_pets.profile import AttributeProfile
from similar_pets.ranker.base import PetProvider

Base = declarative_base()

STATUS_AVAILABLE = "AVAILABLE"
PUBLICATION_APPROVED = "APPROVED"


class Pet(Base):
    """Pet listing model."""

    __tablename__ = "pets"

    id = Column(String, primary_key=True)
    species = Column(String, nullable=False, index=True)
    size = Column(String, nullable=False)  # small, medium, large, xlarge
    age = Column(Float, nullable=False)
    sex = Column(String, nullable=False)
    energy_level = Column(String, nullable=True)
    temperament = Column(String, nullable=True)
    breed = Column(String, nullable=True)
    status = Column(String, nullable=False, default=STATUS_AVAILABLE)
    publication_status = Column(String, nullable=False, default="PENDING")
    expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    def to_profile(self) -> AttributeProfile:
        return AttributeProfile(
            id=self.id,
            category=self.species,
            size=self.size,
            age=self.age,
            sex=self.sex,
            energy_level=self.energy_level,
            temperament=self.temperament,
            breed=self.breed,
        )


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)


def get_session_factory(db_path: Path) -> sessionmaker:
    """
    Get a session factory bound to the database.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy sessionmaker
    """
    engine = create_engine(f"sqlite:///{db_path}")
    return sessionmaker(bind=engine)


class SqlPetProvider(PetProvider):
    """
    PetProvider reading from the pets table.

    A new session is opened per call; database errors propagate to the caller.
    """

    def __init__(self, session_factory: sessionmaker, now: Callable[[], datetime] = datetime.now):
        self.session_factory = session_factory
        self.now = now

    def get_profile(self, pet_id: str) -> Optional[AttributeProfile]:
        with self.session_factory() as session:
            pet = session.get(Pet, pet_id)
            if pet is None:
                return None
            return pet.to_profile()

    def get_candidate_pool(self, category: str, exclude_id: str, pool_cap: int) -> List[AttributeProfile]:
        """
        Eligible pets of the same species, newest listings first.

        Args:
            category: Species of the source pet
            exclude_id: Source pet id, never returned
            pool_cap: Maximum number of candidates

        Returns:
            Profiles in created_at descending order (id ascending on ties)
        """
        now = self.now()
        with self.session_factory() as session:
            pets = (
                session.query(Pet)
                .filter(
                    Pet.id != exclude_id,
                    Pet.species == category,
                    Pet.status == STATUS_AVAILABLE,
                    Pet.publication_status == PUBLICATION_APPROVED,
                    or_(Pet.expires_at.is_(None), Pet.expires_at > now),
                )
                .order_by(Pet.created_at.desc(), Pet.id.asc())
                .limit(pool_cap)
                .all()
            )
            return [pet.to_profile() for pet in pets]
