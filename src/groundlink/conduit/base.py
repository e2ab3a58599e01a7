import threading
from abc import abstractmethod
from contextlib import contextmanager

from groundlink.connector.base import ConduitClosedError


class Conduit:
    """
    A conduit is one open link to the vehicle. Messages are received one at a time with a blocking call, and
    the only message sent is a request for the vehicle to stream its telemetry.

    The conduit keeps count of the receives in progress, so that whoever closes it can wait for
    those receives to unwind (wait_drained) before reusing the underlying port.
    """

    def __init__(self):
        self._state = threading.Condition()
        self._closed = False
        self._receiving = 0

    @property
    @abstractmethod
    def target(self):
        """ a description of what this conduit is connected to """
        raise NotImplementedError

    @property
    def open(self) -> bool:
        """ determines if this conduit is open. Once closed, a conduit cannot be reopened. """
        with self._state:
            return not self._closed

    @property
    def receiving(self) -> int:
        """ the number of receives in progress """
        with self._state:
            return self._receiving

    def receive(self):
        """
        Blocks until the next message arrives.
        :return: the message received, or None if the receive gave up without one.
        raises ConduitClosedError if the conduit has been closed.
        """
        with self._reading():
            return self._receive()

    def request_stream(self, target_system, target_component, stream_id, rate):
        """ asks the vehicle to start sending the given data stream at the given rate in Hz. """
        if not self.open:
            raise ConduitClosedError("conduit %s is closed" % self.target)
        self._request_stream(target_system, target_component, stream_id, rate)

    def close(self):
        """
        Closes the conduit and releases the underlying resource. Does nothing if already closed.
        A receive blocked on the conduit is expected to fail shortly after.
        """
        with self._state:
            if self._closed:
                return
            self._closed = True
        self._close()

    def wait_drained(self, timeout=None) -> bool:
        """
        Waits for all receives in progress to finish.
        :param timeout: the most time to wait in seconds, or None to wait indefinitely
        :return: True if no receives are in progress
        """
        with self._state:
            return self._state.wait_for(lambda: self._receiving == 0, timeout)

    @contextmanager
    def _reading(self):
        with self._state:
            if self._closed:
                raise ConduitClosedError("conduit %s is closed" % self.target)
            self._receiving += 1
        try:
            yield
        finally:
            with self._state:
                self._receiving -= 1
                if not self._receiving:
                    self._state.notify_all()

    @abstractmethod
    def _receive(self):
        raise NotImplementedError

    @abstractmethod
    def _request_stream(self, target_system, target_component, stream_id, rate):
        raise NotImplementedError

    @abstractmethod
    def _close(self):
        raise NotImplementedError


class ConduitFactory:
    """
    A factory knows how to open a conduit to an endpoint.
    """
    @abstractmethod
    def __call__(self, endpoint) -> Conduit:
        """
        Opens a conduit to the given endpoint.
        raises TransportOpenFailed if the endpoint cannot be opened.
        """
        raise NotImplementedError()
