"""
Tests for providers/sql.py - SQLite-backed pet provider.
"""

import pytest
from datetime import datetime, timedelta

from similar_pets.profile import PetSize
from similar_pets.providers.sql import Pet, SqlPetProvider, get_session_factory, init_database
from similar_pets.ranker.engine import SimilarPetsEngine

NOW = datetime(2026, 1, 15, 12, 0, 0)


def make_pet(pet_id, created_minutes_ago=0, **overrides):
    values = dict(
        id=pet_id,
        species="dog",
        size="medium",
        age=3.0,
        sex="male",
        status="AVAILABLE",
        publication_status="APPROVED",
        expires_at=None,
        created_at=NOW - timedelta(minutes=created_minutes_ago),
    )
    values.update(overrides)
    return Pet(**values)


@pytest.fixture
def session_factory(tmp_path):
    """Create a temporary database and return a session factory."""
    db_path = tmp_path / "pets.db"
    init_database(db_path)
    return get_session_factory(db_path)


@pytest.fixture
def provider(session_factory):
    return SqlPetProvider(session_factory, now=lambda: NOW)


def add_pets(session_factory, *pets):
    with session_factory() as session:
        session.add_all(pets)
        session.commit()


class TestDatabaseInit:
    """Test database initialization."""

    def test_init_creates_parent_directories(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "pets.db"

        init_database(db_path)

        assert db_path.exists()

    def test_init_creates_pets_table(self, session_factory):
        with session_factory() as session:
            assert session.query(Pet).count() == 0


class TestGetProfile:

    def test_returns_profile(self, session_factory, provider):
        add_pets(session_factory, make_pet("rex", size="XLarge", energy_level=" high ", breed=""))

        profile = provider.get_profile("rex")

        assert profile.id == "rex"
        assert profile.category == "dog"
        assert profile.size == PetSize.XLARGE
        assert profile.energy_level == "high"
        assert profile.breed is None

    def test_unknown_id_returns_none(self, provider):
        assert provider.get_profile("missing") is None

    def test_profile_lookup_ignores_eligibility(self, session_factory, provider):
        add_pets(session_factory, make_pet("adopted", status="ADOPTED"))
        assert provider.get_profile("adopted") is not None


class TestCandidatePool:

    def test_applies_eligibility_filters(self, session_factory, provider):
        add_pets(
            session_factory,
            make_pet("source"),
            make_pet("ok"),
            make_pet("cat", species="cat"),
            make_pet("adopted", status="ADOPTED"),
            make_pet("pending", publication_status="PENDING"),
            make_pet("expired", expires_at=NOW - timedelta(days=1)),
            make_pet("not_expired", expires_at=NOW + timedelta(days=1)),
        )

        pool = provider.get_candidate_pool("dog", "source", 80)

        assert sorted(p.id for p in pool) == ["not_expired", "ok"]

    def test_orders_newest_first(self, session_factory, provider):
        add_pets(
            session_factory,
            make_pet("old", created_minutes_ago=30),
            make_pet("new", created_minutes_ago=1),
            make_pet("mid", created_minutes_ago=10),
        )

        pool = provider.get_candidate_pool("dog", "source", 80)

        assert [p.id for p in pool] == ["new", "mid", "old"]

    def test_caps_pool_size(self, session_factory, provider):
        add_pets(session_factory, *[make_pet(f"p{i:02d}", created_minutes_ago=i) for i in range(10)])

        pool = provider.get_candidate_pool("dog", "source", 4)

        assert [p.id for p in pool] == ["p00", "p01", "p02", "p03"]


def test_engine_with_sql_provider(session_factory, provider):
    """DBから取得した候補で類似度ランキングが生成されること"""
    add_pets(
        session_factory,
        make_pet("source", breed="labrador", energy_level="high", created_minutes_ago=60),
        make_pet("older_twin", breed="labrador", energy_level="high", created_minutes_ago=20),
        make_pet("newer_twin", breed="Labrador", energy_level="high", created_minutes_ago=5),
        make_pet("big", size="large", age=9.0, sex="female"),
        make_pet("hidden", breed="labrador", energy_level="high", status="ADOPTED"),
    )

    engine = SimilarPetsEngine(provider)
    result = engine.rank("source", 12)

    assert [(c.candidate_id, c.score) for c in result] == [
        ("newer_twin", 100),
        ("older_twin", 100),
        ("big", 0),
    ]
