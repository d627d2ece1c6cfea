"""Pytest configuration and shared fixtures."""

import pytest

from communique.recipients import StaticClassifier, StaticResolver


EUROPE = ["testlandia", "aurelia", "borealis", "castellan"]
WA_MEMBERS = ["aurelia", "castellan", "dunmore", "zephyria"]
DELEGATES = ["castellan", "zephyria"]
NEW_NATIONS = ["fresh_one", "fresh_two"]


@pytest.fixture
def resolver():
    """Offline resolver with one region and every tag populated."""
    return StaticResolver(
        regions={
            "europe": EUROPE,
            "testregion": ["example_nation", "other_nation"],
            "the north pacific": ["borealis", "dunmore"],
        },
        tags={
            "wa": WA_MEMBERS,
            "delegates": DELEGATES,
            "new": NEW_NATIONS,
            "all": EUROPE + ["dunmore", "zephyria"] + NEW_NATIONS,
        },
    )


@pytest.fixture
def classifier():
    return StaticClassifier(DELEGATES)
