import unittest
from unittest.mock import Mock

import timeout_decorator
from hamcrest import assert_that, is_, none

from groundlink import settings
from groundlink.conduit.base_test import FakeConduit, wait_until
from groundlink.connector.registry import ConnectionRegistry
from groundlink.support.loop_test import debug_timeout
from groundlink.telemetry.decoder_test import mav_message
from groundlink.telemetry.events import StatusNotice
from groundlink.telemetry.reader import TelemetryReader


class TelemetryReaderTest(unittest.TestCase):

    def setUp(self):
        self.registry = ConnectionRegistry()
        self.sink = Mock()
        self.logger = Mock()
        self.sut = TelemetryReader(self.registry, self.sink, poll_interval=0.001, log=self.logger)

    def tearDown(self):
        self.registry.close()
        self.sut.stop(1)

    def test_nothing_connected(self):
        assert_that(self.sut.read_once(), is_(none()))
        self.sink.emit.assert_not_called()

    def test_publishes_decoded_message(self):
        conduit = FakeConduit("COM3")
        self.registry.install(conduit)
        conduit.deliver(mav_message('SYS_STATUS', voltage_battery=12600))
        self.sut.read_once()
        self.sink.emit.assert_called_once_with('battery-data', {'voltage': 12.6})

    def test_unrecognized_message_is_dropped(self):
        conduit = FakeConduit("COM3")
        self.registry.install(conduit)
        conduit.deliver(mav_message('PARAM_VALUE'))
        assert_that(self.sut.read_once(), is_(none()))
        self.sink.emit.assert_not_called()

    def test_receive_giving_up_is_not_an_error(self):
        conduit = FakeConduit("COM3")
        self.registry.install(conduit)
        conduit.deliver(None)
        assert_that(self.sut.read_once(), is_(none()))
        self.sink.emit.assert_not_called()

    def test_receive_error_ends_iteration_quietly(self):
        conduit = FakeConduit("COM3")
        self.registry.install(conduit)
        conduit.deliver(OSError("device disconnected"))
        assert_that(self.sut.read_once(), is_(none()))
        self.logger.debug.assert_called_once()
        self.sink.emit.assert_not_called()

    def test_closed_conduit_ends_iteration_quietly(self):
        conduit = FakeConduit("COM3")
        self.registry.install(conduit)
        conduit.close()
        assert_that(self.sut.read_once(), is_(none()))

    def test_uses_custom_decoder(self):
        event = StatusNotice("custom")
        sut = TelemetryReader(self.registry, self.sink, decode=Mock(return_value=event))
        conduit = FakeConduit("COM3")
        self.registry.install(conduit)
        conduit.deliver(Mock())
        assert_that(sut.read_once(), is_(event))
        self.sink.emit.assert_called_once_with('status', {'message': 'custom'})

    @timeout_decorator.timeout(debug_timeout(2))
    def test_reader_survives_errors_and_replacement(self):
        first = FakeConduit("COM3")
        self.registry.install(first)
        self.sut.start()
        first.deliver(OSError("read failed"))
        first.deliver(mav_message('HEARTBEAT'))
        wait_until(lambda: self.sink.emit.call_count == 1)

        self.registry.close()
        second = FakeConduit("COM4")
        self.registry.install(second)
        second.deliver(mav_message('VFR_HUD', alt=10.0, groundspeed=3.0))
        wait_until(lambda: self.sink.emit.call_count == 2)
        self.sink.emit.assert_called_with('hud-data', {'altitude': 10.0, 'groundspeed': 3.0})
        assert_that(self.sut.alive, is_(True))

    @timeout_decorator.timeout(debug_timeout(2))
    def test_idles_until_connected(self):
        self.sut.start()
        wait_until(lambda: self.sut.alive)
        conduit = FakeConduit("COM3")
        self.registry.install(conduit)
        conduit.deliver(mav_message('HEARTBEAT'))
        wait_until(lambda: self.sink.emit.call_count == 1)
        self.sink.emit.assert_called_once_with('status', {'message': 'Heartbeat received'})

    @timeout_decorator.timeout(debug_timeout(2))
    def test_stop(self):
        self.sut.start()
        wait_until(lambda: self.sut.alive)
        thread = self.sut.background_thread
        self.sut.stop(1)
        assert_that(thread.is_alive(), is_(False))
        assert_that(self.sut.running(), is_(False))

    def test_poll_interval_defaults_to_setting(self):
        sut = TelemetryReader(self.registry, self.sink)
        assert_that(sut.poll_interval, is_(settings.poll_interval))
