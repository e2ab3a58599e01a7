"""
Implements a conduit over a MAVLink serial link, using pymavlink for the framing.
"""

import logging

from pymavlink import mavutil
from serial import SerialException
from serial.tools import list_ports

from groundlink import settings
from groundlink.conduit.base import Conduit, ConduitFactory
from groundlink.connector.base import TransportOpenFailed

logger = logging.getLogger(__name__)


class MavlinkConduit(Conduit):
    """
    A conduit that receives MAVLink messages from a pymavlink connection.

    :param connection: the open pymavlink connection (as returned by mavutil.mavlink_connection)
    :param endpoint: the endpoint the connection was opened for
    :param receive_timeout: seconds to wait for a message, None (or 0) to wait until one arrives
    """

    def __init__(self, connection, endpoint, receive_timeout=None):
        super().__init__()
        self.connection = connection
        self.endpoint = endpoint
        self.receive_timeout = receive_timeout or None

    @property
    def target(self):
        return self.endpoint

    def _receive(self):
        return self.connection.recv_match(blocking=True, timeout=self.receive_timeout)

    def _request_stream(self, target_system, target_component, stream_id, rate):
        self.connection.mav.request_data_stream_send(target_system, target_component, stream_id, rate, 1)

    def _close(self):
        self.connection.close()


class MavlinkConduitFactory(ConduitFactory):
    """
    Opens a serial MAVLink connection to an endpoint.
    """
    def __init__(self, connect=mavutil.mavlink_connection, receive_timeout=None):
        self._connect = connect
        self.receive_timeout = receive_timeout

    def __call__(self, endpoint) -> MavlinkConduit:
        try:
            connection = self._connect(endpoint.path, baud=endpoint.baud)
        except (SerialException, OSError, ValueError) as e:
            logger.warning("error opening %s: %s" % (endpoint, e))
            raise TransportOpenFailed("Mavlink Connect Error: %s" % e) from e
        logger.info("opened MAVLink link on %s at %d baud" % (endpoint.path, endpoint.baud))
        timeout = self.receive_timeout if self.receive_timeout is not None else settings.receive_timeout
        return MavlinkConduit(connection, endpoint, timeout)


open_mavlink_conduit = MavlinkConduitFactory()


def serial_port_info():
    """
    :return: a tuple of serial port info objects
    """
    return tuple(list_ports.comports())


def serial_ports():
    """
    Lists the device names of the serial ports present. Never raises - if the ports cannot be
    enumerated, the list is empty.
    """
    try:
        return [port.device for port in serial_port_info()]
    except (SerialException, OSError) as e:
        logger.warning("unable to list serial ports: %s" % e)
        return []
