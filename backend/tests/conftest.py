import pytest

from messagebus import Bus


@pytest.fixture
def bus():
    return Bus()


@pytest.fixture
def topic(bus):
    return bus.get_topic("testtopic")
