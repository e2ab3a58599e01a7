"""


Ground station telemetry bridge

- Conduit: an open MAVLink link to the vehicle. Provides a blocking receive of framed messages
  and the one control message we send (a data stream request).
- Registry: a single slot holding the live conduit, if any. All access goes through the registry lock.
- ConnectionManager: connects to an endpoint (serial port + baud), replacing any previous conduit,
  and disconnects.
- TelemetryReader: a background loop that reads the current conduit, decodes each message and
  publishes the resulting event to an event sink.
- Decoder: maps each MAVLink message type to a typed telemetry event, converting units on the way.
- TelemetryBridge: the facade used by the presentation layer.


## Threading

The reader runs on its own daemon thread. connect/disconnect run on the caller's thread.

The receive blocks, so it's never called with the registry lock held. The reader fetches the
conduit under the lock, releases, then receives. A disconnect closes the conduit, which makes the
blocked receive fail, and the reader carries on with whatever is in the registry next time around.

When a conduit is replaced, connect waits for any receive still running on the old conduit to
unwind before opening the new one. The conduit counts receives in flight so this is a proper
handshake, with the quiescence interval as an upper bound.

"""
