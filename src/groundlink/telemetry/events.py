"""
Telemetry events. Each event type is published under its own topic, with a payload keyed the
way the presentation layer expects (camelCase).
"""
from groundlink.support.mixins import StringerMixin

IMU_TOPIC = 'imu-data'
HUD_TOPIC = 'hud-data'
BATTERY_TOPIC = 'battery-data'
GPS_TOPIC = 'gps-data'
PRESSURE_TOPIC = 'pressure-data'
STATUS_TOPIC = 'status'


class TelemetryEvent(StringerMixin):
    """ base class for telemetry events.
    Subclasses define the topic, and the fields as (attribute, payload key) pairs.
    """
    topic = None
    fields = ()

    def payload(self) -> dict:
        return {key: getattr(self, attr) for attr, key in self.fields}


class ImuSample(TelemetryEvent):
    """ accelerations in m/s^2, rotation rates in deg/s, magnetic field in uT """
    topic = IMU_TOPIC
    fields = (('accel_x', 'accelX'), ('accel_y', 'accelY'), ('accel_z', 'accelZ'),
              ('gyro_x', 'gyroX'), ('gyro_y', 'gyroY'), ('gyro_z', 'gyroZ'),
              ('mag_x', 'magX'), ('mag_y', 'magY'), ('mag_z', 'magZ'))

    def __init__(self, accel_x, accel_y, accel_z, gyro_x, gyro_y, gyro_z, mag_x=None, mag_y=None, mag_z=None):
        self.accel_x = accel_x
        self.accel_y = accel_y
        self.accel_z = accel_z
        self.gyro_x = gyro_x
        self.gyro_y = gyro_y
        self.gyro_z = gyro_z
        self.mag_x = mag_x
        self.mag_y = mag_y
        self.mag_z = mag_z


class HudSample(TelemetryEvent):
    topic = HUD_TOPIC
    fields = (('altitude', 'altitude'), ('groundspeed', 'groundspeed'))

    def __init__(self, altitude, groundspeed):
        self.altitude = altitude          # m
        self.groundspeed = groundspeed    # m/s


class BatterySample(TelemetryEvent):
    topic = BATTERY_TOPIC
    fields = (('voltage', 'voltage'),)

    def __init__(self, voltage):
        self.voltage = voltage            # V


class GpsSample(TelemetryEvent):
    topic = GPS_TOPIC
    fields = (('lat', 'lat'), ('lon', 'lon'), ('alt', 'alt'), ('satellites', 'satellites'))

    def __init__(self, lat, lon, alt, satellites):
        self.lat = lat                    # deg
        self.lon = lon                    # deg
        self.alt = alt                    # m
        self.satellites = satellites


class PressureSample(TelemetryEvent):
    topic = PRESSURE_TOPIC
    fields = (('pressure', 'pressure'), ('temperature', 'temperature'))

    def __init__(self, pressure, temperature):
        self.pressure = pressure
        self.temperature = temperature


class StatusNotice(TelemetryEvent):
    topic = STATUS_TOPIC
    fields = (('message', 'message'),)

    def __init__(self, message):
        self.message = message


TOPICS = (IMU_TOPIC, HUD_TOPIC, BATTERY_TOPIC, GPS_TOPIC, PRESSURE_TOPIC, STATUS_TOPIC)
