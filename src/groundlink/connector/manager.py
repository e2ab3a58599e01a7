import logging
import threading

from groundlink import settings
from groundlink.conduit.base import Conduit
from groundlink.connector.base import ConnectionEndpoint, ConnectorConnectedEvent, ConnectorDisconnectedEvent, \
    NoActiveConnection
from groundlink.connector.registry import ConnectionRegistry
from groundlink.support.events import EventSource

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Opens, replaces and closes the live conduit held in the registry.

    Connecting when already connected closes the old conduit first, and waits for any receive
    still running on it to finish (up to the quiescence interval) before the new conduit is opened.
    connect() and disconnect() are serialized with each other, so two conduits are never open at once.

    Fires ConnectorConnectedEvent and ConnectorDisconnectedEvent as the connection changes.

    :param registry:    where the live conduit is kept
    :param opener:      a ConduitFactory - called with a ConnectionEndpoint, returns an open Conduit or raises
        TransportOpenFailed
    :param quiescence_interval: seconds to wait for a replaced conduit to drain. Defaults to the configured value.
    """

    def __init__(self, registry: ConnectionRegistry, opener, quiescence_interval=None, log=logger):
        self.registry = registry
        self.opener = opener
        self.events = EventSource()
        self.logger = log
        self._quiescence_interval = quiescence_interval
        self._lifecycle = threading.Lock()

    @property
    def quiescence_interval(self):
        return self._quiescence_interval if self._quiescence_interval is not None else settings.quiescence_interval

    @property
    def connected(self) -> bool:
        return self.registry.connected

    @property
    def endpoint(self):
        """ the endpoint of the live conduit, or None """
        handle = self.registry.current()
        return handle.target if handle is not None else None

    def connect(self, endpoint: ConnectionEndpoint):
        """
        Opens a conduit to the endpoint, replacing any existing one.
        :return: a message describing the connection
        raises TransportOpenFailed if the endpoint could not be opened. The registry is then left empty.
        """
        replaced = None
        try:
            with self._lifecycle:
                replaced = self._retire(self.registry.close())
                handle = self.opener(endpoint)
                displaced = self.registry.install(handle)
                if displaced is not None:
                    displaced.close()
                self.logger.info("connected to %s" % endpoint)
        finally:
            if replaced is not None:
                self.events.fire(ConnectorDisconnectedEvent(replaced.target))
        self.events.fire(ConnectorConnectedEvent(endpoint))
        self.request_stream(handle)
        return "Connected to %s" % endpoint.identifier

    def disconnect(self):
        """
        Closes the live conduit.
        :return: a message confirming the disconnection
        raises NoActiveConnection if there was nothing to disconnect.
        """
        with self._lifecycle:
            handle = self.registry.close()
        if handle is None:
            raise NoActiveConnection("No connection is active to disconnect.")
        self.logger.info("disconnected from %s" % handle.target)
        self.events.fire(ConnectorDisconnectedEvent(handle.target))
        return "Disconnected successfully"

    def request_stream(self, handle: Conduit=None):
        """
        Asks the vehicle to stream all telemetry at the configured rate. Failures are logged and ignored.
        :param handle: the conduit to send on, by default the live conduit
        :return: True if the request was sent
        """
        if handle is None:
            handle = self.registry.current()
            if handle is None:
                return False
        try:
            handle.request_stream(settings.target_system, settings.target_component,
                                  settings.stream_id, settings.stream_rate)
        except Exception as e:
            self.logger.warning("unable to request telemetry stream on %s: %s" % (handle.target, e))
            return False
        self.logger.debug("requested stream %d at %d Hz on %s" % (settings.stream_id, settings.stream_rate,
                                                                handle.target))
        return True

    def _retire(self, handle: Conduit):
        """ waits for a closed conduit to drain. """
        if handle is not None:
            self.logger.info("closed previous connection to %s" % handle.target)
            if not handle.wait_drained(self.quiescence_interval):
                self.logger.warning("a receive on %s was still running after %.2fs" %
                                    (handle.target, self.quiescence_interval))
        return handle
