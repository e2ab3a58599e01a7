"""
Turns MAVLink messages into telemetry events for the presentation layer.

- decoder: MAVLink message -> event, with unit conversions
- events: the event types and the topic each is published under
- sink: where events are published
- reader: the background loop pumping messages from the live conduit through the decoder to the sink
"""
