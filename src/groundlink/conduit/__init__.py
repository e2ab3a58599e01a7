"""
The conduit package provides an abstraction of an open link to the vehicle, carrying framed MAVLink messages.
The concrete implementation wraps a pymavlink connection over a serial port.
"""
