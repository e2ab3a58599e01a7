from abc import abstractmethod

from groundlink.support.events import EventSource, QueuedEventSource


class EventSink:
    """
    Receives telemetry published by the reader. There's no acknowledgement and no backpressure -
    the reader publishes and moves on.
    """

    @abstractmethod
    def emit(self, topic, payload):
        """
        :param topic: the event topic, such as 'imu-data'
        :param payload: the event payload, a dict
        """
        raise NotImplementedError


class EventSourceSink(EventSink):
    """ fires each event to the handlers on an EventSource, on the publishing thread.
    Handlers are called as handler(topic, payload).
    """

    def __init__(self, events=None):
        self.events = events if events is not None else EventSource()

    def emit(self, topic, payload):
        self.events.fire(topic, payload)


class QueuedEventSink(EventSourceSink):
    """ queues events published by the reader thread until publish() is called on the thread that owns
    the handlers.
    """

    def __init__(self):
        super().__init__(QueuedEventSource())

    def publish(self):
        """ delivers the queued events on the calling thread.
        :return: the number of events delivered
        """
        return self.events.publish()
