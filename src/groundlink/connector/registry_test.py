import threading
import unittest
from unittest.mock import Mock

from hamcrest import assert_that, calling, is_, raises

from groundlink.connector.registry import ConnectionRegistry


class ConnectionRegistryTest(unittest.TestCase):

    def setUp(self):
        self.sut = ConnectionRegistry()

    def test_initially_empty(self):
        assert_that(self.sut.current(), is_(None))
        assert_that(self.sut.connected, is_(False))

    def test_with_lock_returns_result(self):
        assert_that(self.sut.with_lock(lambda slot: slot.handle is None), is_(True))

    def test_with_lock_holds_the_lock(self):
        held = self.sut.with_lock(lambda slot: self.sut._lock.locked())
        assert_that(held, is_(True))
        assert_that(self.sut._lock.locked(), is_(False))

    def test_lock_released_when_fn_raises(self):
        def fail(slot):
            raise ValueError("boom")
        assert_that(calling(self.sut.with_lock).with_args(fail), raises(ValueError))
        assert_that(self.sut._lock.locked(), is_(False))

    def test_install_returns_previous(self):
        h1, h2 = Mock(), Mock()
        assert_that(self.sut.install(h1), is_(None))
        assert_that(self.sut.current(), is_(h1))
        assert_that(self.sut.connected, is_(True))
        assert_that(self.sut.install(h2), is_(h1))
        assert_that(self.sut.current(), is_(h2))
        h1.close.assert_not_called()

    def test_take_empties_slot(self):
        handle = Mock()
        self.sut.install(handle)
        assert_that(self.sut.take(), is_(handle))
        assert_that(self.sut.current(), is_(None))
        handle.close.assert_not_called()

    def test_close_closes_and_empties_slot(self):
        handle = Mock()
        self.sut.install(handle)
        assert_that(self.sut.close(), is_(handle))
        handle.close.assert_called_once_with()
        assert_that(self.sut.connected, is_(False))

    def test_close_when_empty(self):
        assert_that(self.sut.close(), is_(None))
        assert_that(self.sut.connected, is_(False))

    def test_concurrent_access_is_serialized(self):
        inside = []
        overlaps = []

        def work(slot):
            inside.append(1)
            if len(inside) > 1:
                overlaps.append(1)
            slot.handle = threading.current_thread()
            inside.pop()

        threads = [threading.Thread(target=lambda: [self.sut.with_lock(work) for _ in range(200)])
                   for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert_that(overlaps, is_([]))
