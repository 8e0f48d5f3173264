import threading

import pytest

from messagebus import Bus, Topic, get_bus


def test_get_bus_is_a_singleton():
    assert get_bus() is get_bus()


def test_get_bus_is_a_singleton_across_threads():
    seen = []
    threads = [threading.Thread(target=lambda: seen.append(get_bus())) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert all(b is seen[0] for b in seen)
    assert seen[0] is get_bus()


def test_get_topic_creates_once(bus):
    topic = bus.get_topic("orders")
    assert isinstance(topic, Topic)
    assert bus.get_topic("orders") is topic
    assert "orders" in bus
    assert len(bus) == 1


def test_existing_topic_keeps_its_max_log_size(bus):
    topic = bus.get_topic("orders", max_log_size=5)
    again = bus.get_topic("orders", max_log_size=10)
    assert again is topic
    assert again.max_log_size == 5


def test_default_topic_is_unbounded(bus):
    assert bus.get_topic("t").max_log_size == -1


def test_invalid_max_log_size_creates_nothing(bus):
    with pytest.raises(ValueError):
        bus.get_topic("bad", max_log_size=-5)
    assert "bad" not in bus


def test_find_topic_does_not_create(bus):
    with pytest.raises(KeyError):
        bus.find_topic("missing")
    assert len(bus) == 0
    created = bus.get_topic("present")
    assert bus.find_topic("present") is created


def test_topics_are_independent(bus):
    a = bus.get_topic("a")
    b = bus.get_topic("b")
    a.send(1)
    a.send(2)
    assert b.send(3).id == 0
    assert [t.name for t in bus.topics] == ["a", "b"]


def test_separate_buses_do_not_share_topics():
    assert Bus().get_topic("x") is not Bus().get_topic("x")
