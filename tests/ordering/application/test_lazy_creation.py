"""Tests for the concurrent-safe get_or_create helper."""

import pytest
from protean.exceptions import ValidationError

from storefront.errors import StorefrontError
from storefront.shared import creation
from storefront.shared.creation import get_or_create


class RacingRepository:
    """Loses the insert race `losses` times; another writer's record appears each time."""

    def __init__(self, losses, field="customer_id", winner="winner", publish_winner=True):
        self.losses = losses
        self.field = field
        self.winner = winner
        self.publish_winner = publish_winner
        self.stored = None
        self.adds = 0

    def find(self):
        return self.stored

    def add(self, item):
        self.adds += 1
        if self.losses:
            self.losses -= 1
            if self.publish_winner:
                self.stored = self.winner
            raise ValidationError({self.field: ["is already present"]})
        self.stored = item


@pytest.fixture()
def sleeps(monkeypatch):
    calls = []
    monkeypatch.setattr(creation.time, "sleep", calls.append)
    return calls


def test_returns_existing_without_building(sleeps):
    repo = RacingRepository(losses=0)
    repo.stored = "existing"

    def build():
        raise AssertionError("should not build")

    assert get_or_create(repo, repo.find, build, unique_field="customer_id") == "existing"
    assert repo.adds == 0


def test_creates_when_missing(sleeps):
    repo = RacingRepository(losses=0)
    assert get_or_create(repo, repo.find, lambda: "mine", unique_field="customer_id") == "mine"
    assert sleeps == []


def test_losing_the_race_returns_the_winner(sleeps):
    repo = RacingRepository(losses=1)

    result = get_or_create(repo, repo.find, lambda: "mine", unique_field="customer_id")

    assert result == "winner"
    assert repo.adds == 1
    assert sleeps == [pytest.approx(0.05)]


def test_other_validation_errors_propagate(sleeps):
    repo = RacingRepository(losses=1, field="name")

    with pytest.raises(ValidationError):
        get_or_create(repo, repo.find, lambda: "mine", unique_field="customer_id")
    assert sleeps == []


def test_gives_up_after_three_attempts(sleeps):
    repo = RacingRepository(losses=10, publish_winner=False)

    with pytest.raises(StorefrontError):
        get_or_create(repo, repo.find, lambda: "mine", unique_field="customer_id")

    assert repo.adds == 3
    assert sleeps == [pytest.approx(0.05), pytest.approx(0.1), pytest.approx(0.15)]
