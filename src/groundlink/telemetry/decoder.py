"""
Decodes MAVLink messages into telemetry events.

Only a handful of message types are of interest. MessageKind names each of them, and everything
else is UNRECOGNIZED, which decodes to no event. Each kind, UNRECOGNIZED included, has exactly one decoder
in DECODERS. Decoding is a pure function of the message.
"""
import math
from enum import Enum

from groundlink.telemetry.events import BatterySample, GpsSample, HudSample, ImuSample, PressureSample, \
    StatusNotice

HEARTBEAT_MESSAGE = "Heartbeat received"

RAD_TO_DEG = 180.0 / math.pi


class MessageKind(Enum):
    """ the MAVLink message types that produce telemetry. The values are the MAVLink message names. """
    ATTITUDE = 'ATTITUDE'
    RAW_IMU = 'RAW_IMU'
    VFR_HUD = 'VFR_HUD'
    SYS_STATUS = 'SYS_STATUS'
    GPS_RAW_INT = 'GPS_RAW_INT'
    HEARTBEAT = 'HEARTBEAT'
    SCALED_PRESSURE = 'SCALED_PRESSURE'
    UNRECOGNIZED = None

    @classmethod
    def of(cls, message):
        """ classifies a message by its MAVLink type name """
        name = message.get_type()
        if name is None:
            return cls.UNRECOGNIZED
        try:
            return cls(name)
        except ValueError:
            return cls.UNRECOGNIZED


def decode_attitude(msg):
    """ attitude carries the body rotation rates in rad/s. No acceleration or field strength. """
    return ImuSample(0.0, 0.0, 0.0,
                     msg.rollspeed * RAD_TO_DEG, msg.pitchspeed * RAD_TO_DEG, msg.yawspeed * RAD_TO_DEG,
                     0.0, 0.0, 0.0)


def decode_raw_imu(msg):
    return ImuSample(msg.xacc / 1000, msg.yacc / 1000, msg.zacc / 1000,
                     msg.xgyro * 0.001, msg.ygyro * 0.001, msg.zgyro * 0.001,
                     msg.xmag / 1000, msg.ymag / 1000, msg.zmag / 1000)


def decode_vfr_hud(msg):
    return HudSample(msg.alt, msg.groundspeed)


def decode_sys_status(msg):
    # mV
    return BatterySample(msg.voltage_battery / 1000)


def decode_gps_raw_int(msg):
    # degE7, mm
    return GpsSample(msg.lat / 1e7, msg.lon / 1e7, msg.alt / 1000, msg.satellites_visible)


def decode_heartbeat(msg):
    return StatusNotice(HEARTBEAT_MESSAGE)


def decode_scaled_pressure(msg):
    return PressureSample(msg.press_abs / 1000, msg.temperature / 1000)


DECODERS = {
    MessageKind.ATTITUDE: decode_attitude,
    MessageKind.RAW_IMU: decode_raw_imu,
    MessageKind.VFR_HUD: decode_vfr_hud,
    MessageKind.SYS_STATUS: decode_sys_status,
    MessageKind.GPS_RAW_INT: decode_gps_raw_int,
    MessageKind.HEARTBEAT: decode_heartbeat,
    MessageKind.SCALED_PRESSURE: decode_scaled_pressure,
    MessageKind.UNRECOGNIZED: lambda msg: None,
}


def decode_message(message):
    """
    Decodes a MAVLink message.
    :param message: a pymavlink message, or anything with get_type() and the message's fields
    :return: the TelemetryEvent for the message, or None if the message isn't telemetry
    """
    return DECODERS[MessageKind.of(message)](message)
