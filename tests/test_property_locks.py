import threading
import pytest
from parkspot.utils.property_locks import PropertyLockRegistry


def test_same_property_shares_one_lock_while_held():
    locks = PropertyLockRegistry()
    with locks.hold("spot-1"):
        first = locks._locks["spot-1"][0]
        with locks.hold("spot-2"):
            assert locks._locks["spot-2"][0] is not first
            assert len(locks) == 2


def test_different_properties_can_be_held_together():
    locks = PropertyLockRegistry()
    with locks.hold("spot-1"):
        with locks.hold("spot-2"):
            pass


def test_hold_blocks_other_threads_on_same_property():
    locks = PropertyLockRegistry()
    acquired = threading.Event()

    def contender():
        with locks.hold("spot-1"):
            acquired.set()

    with locks.hold("spot-1"):
        thread = threading.Thread(target=contender)
        thread.start()
        assert not acquired.wait(0.1)
        # The waiting thread keeps the entry alive
        assert locks._locks["spot-1"][1] == 2
    thread.join(timeout=2)
    assert acquired.is_set()
    assert len(locks) == 0


def test_entries_are_dropped_after_release():
    locks = PropertyLockRegistry()
    for i in range(100):
        with locks.hold(f"spot-{i}"):
            assert len(locks) == 1
    assert len(locks) == 0


def test_entry_is_dropped_when_holder_raises():
    locks = PropertyLockRegistry()
    with pytest.raises(RuntimeError):
        with locks.hold("spot-1"):
            raise RuntimeError("boom")
    assert len(locks) == 0
