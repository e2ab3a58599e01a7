import logging

from groundlink import settings
from groundlink.connector.registry import ConnectionRegistry
from groundlink.support.loop import AsyncLoop
from groundlink.telemetry.decoder import decode_message
from groundlink.telemetry.sink import EventSink

logger = logging.getLogger(__name__)


class TelemetryReader(AsyncLoop):
    """
    Pumps telemetry from the live conduit to an event sink on a background thread.

    Each time around the loop the conduit is fetched afresh from the registry, so a replaced
    conduit is picked up without the reader being told. The receive itself happens with the registry
    lock released. When nothing is connected the loop just idles.

    Receive errors (typically the conduit being closed under a blocked receive) end the iteration
    quietly - the reader never stops on its own. Call stop() to end it.

    :param registry:    holds the live conduit
    :param sink:        where decoded events are published
    :param decode:      message -> event or None
    :param poll_interval:   seconds to pause between iterations. Defaults to the configured value.
    """

    def __init__(self, registry: ConnectionRegistry, sink: EventSink, decode=decode_message,
                 poll_interval=None, log=logger):
        super().__init__(log=log, name="telemetry-reader")
        self.registry = registry
        self.sink = sink
        self.decode = decode
        self._poll_interval = poll_interval

    @property
    def poll_interval(self):
        return self._poll_interval if self._poll_interval is not None else settings.poll_interval

    def loop(self):
        try:
            self.read_once()
        finally:
            self.stop_event.wait(self.poll_interval)

    def read_once(self):
        """
        Reads and publishes at most one message.
        :return: the event published, or None
        """
        handle = self.registry.current()
        if handle is None:
            return None
        try:
            message = handle.receive()
        except Exception as e:
            self.logger.debug("receive from %s failed: %s" % (handle.target, e))
            return None
        if message is None:
            return None
        event = self.decode(message)
        if event is not None:
            self.sink.emit(event.topic, event.payload())
        return event
