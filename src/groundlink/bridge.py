"""
The operations offered to the presentation layer: connect, disconnect, list the serial ports,
and start the telemetry stream. Telemetry arrives at the event sink given to the bridge.
"""
import argparse
import logging
import sys
import time

from groundlink import settings
from groundlink.conduit.mavlink_conduit import open_mavlink_conduit, serial_ports
from groundlink.connector.base import ConnectionEndpoint, ConnectorError
from groundlink.connector.manager import ConnectionManager
from groundlink.connector.registry import ConnectionRegistry
from groundlink.telemetry.reader import TelemetryReader
from groundlink.telemetry.sink import EventSink, QueuedEventSink

logger = logging.getLogger(__name__)


class TelemetryBridge:
    """
    Owns the registry, the connection manager and the telemetry reader.

    :param sink:        receives the telemetry events
    :param opener:      opens a conduit for a ConnectionEndpoint
    :param port_lister: lists the available serial port names
    """

    def __init__(self, sink: EventSink, opener=open_mavlink_conduit, port_lister=serial_ports,
                 quiescence_interval=None, poll_interval=None):
        self.registry = ConnectionRegistry()
        self.manager = ConnectionManager(self.registry, opener, quiescence_interval)
        self.reader = TelemetryReader(self.registry, sink, poll_interval=poll_interval)
        self.port_lister = port_lister

    @property
    def events(self):
        """ connector events - ConnectorConnectedEvent and ConnectorDisconnectedEvent """
        return self.manager.events

    @property
    def connected(self):
        return self.manager.connected

    @property
    def streaming(self):
        """ true while the reader thread is running, including one still winding down after a stop """
        return self.reader.alive

    def connect(self, port, baud):
        """
        Connects to the vehicle on the given serial port, replacing any existing connection.
        :return: "Connected to <port>"
        raises TransportOpenFailed if the port could not be opened
        """
        return self.manager.connect(ConnectionEndpoint(port, baud))

    def disconnect(self):
        """
        :return: "Disconnected successfully"
        raises NoActiveConnection if not connected
        """
        return self.manager.disconnect()

    def list_available_ports(self):
        return list(self.port_lister())

    def start_telemetry_stream(self):
        """
        Requests the telemetry stream if connected, and starts the reader. The reader is only ever
        started once; calling this again just repeats the stream request. A reader still winding down
        from stop_telemetry_stream() is resumed rather than a second one started.
        """
        self.manager.request_stream()
        if self.reader.start():
            logger.info("telemetry stream started")
        else:
            logger.debug("telemetry stream already started")

    def stop_telemetry_stream(self, timeout=None):
        """ stops the reader. A stream request already sent to the vehicle is not revoked.
        A reader blocked in a receive only exits once the receive returns or the connection is closed,
        so disconnect first to stop promptly.
        """
        self.reader.stop(timeout)
        logger.info("telemetry stream stopped")


def log_events(topic, payload):
    logger.info("%s %s" % (topic, payload))


def monitor(argv=None):
    """ A helper function to watch the telemetry from a vehicle for manual testing. """
    settings.load()
    parser = argparse.ArgumentParser(description="log MAVLink telemetry from a serial port")
    parser.add_argument('port', nargs='?', help="the serial port, omit to list the available ports")
    parser.add_argument('--baud', type=int, default=settings.default_baud)
    args = parser.parse_args(argv)

    root = logging.getLogger('groundlink')
    root.setLevel(logging.INFO)
    root.addHandler(logging.StreamHandler())

    sink = QueuedEventSink()
    sink.events += log_events
    bridge = TelemetryBridge(sink)
    if not args.port:
        logger.info("available ports: %s" % ", ".join(bridge.list_available_ports()))
        return 0
    try:
        logger.info(bridge.connect(args.port, args.baud))
    except ConnectorError as e:
        logger.error(str(e))
        return 1
    bridge.start_telemetry_stream()
    try:
        while True:
            time.sleep(0.1)
            sink.publish()
    except KeyboardInterrupt:
        pass
    finally:
        logger.info(bridge.disconnect())
        bridge.stop_telemetry_stream(1)
    return 0


if __name__ == '__main__':
    sys.exit(monitor())
