from groundlink.support.mixins import CommonEqualityMixin, StringerMixin


class ConnectorError(Exception):
    """ Indicates an error condition with a connection. """


class TransportOpenFailed(ConnectorError):
    """ The link to the endpoint could not be opened. The message describes why. """


class NoActiveConnection(ConnectorError):
    """ A connection is required but there is none. """


class ConduitClosedError(ConnectorError):
    """ The conduit was used after it was closed. """


class ConnectionEndpoint(CommonEqualityMixin, StringerMixin):
    """ Describes how to open a link: the serial device path and baud rate. """

    def __init__(self, path, baud):
        self.path = path
        self.baud = int(baud)

    @property
    def identifier(self):
        """ the human readable name of this endpoint """
        return self.path


class ConnectorEvent:
    """ base class for connector events. """
    def __init__(self, endpoint: ConnectionEndpoint):
        self.endpoint = endpoint


class ConnectorConnectedEvent(ConnectorEvent):
    """ A link to the endpoint was opened. """


class ConnectorDisconnectedEvent(ConnectorEvent):
    """ The link to the endpoint was closed. """
