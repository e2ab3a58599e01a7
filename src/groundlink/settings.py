"""
Tunable defaults for the bridge. The values below are overridden by settings.default.cfg,
a platform file (settings.windows.cfg, settings.linux.cfg, settings.osx.cfg), the user's ~/.groundlink.cfg
and finally settings.cfg, once load() has been called. All files are optional apart from the schema.
"""
import sys

from groundlink.config.config import configure_module, user_config_file

# seconds connect waits for a reader still receiving on a replaced conduit
quiescence_interval = 0.1

# seconds the telemetry reader pauses between receives
poll_interval = 0.05

# receive timeout in seconds, 0 blocks until a message arrives or the link fails
receive_timeout = 0

# the REQUEST_DATA_STREAM sent when connecting
target_system = 1
target_component = 1
stream_id = 0           # MAV_DATA_STREAM_ALL
stream_rate = 10        # Hz

default_baud = 57600


def load(user_file=None):
    """ applies the configuration files to this module.
    :param user_file: the per-user override, by default ~/.groundlink.cfg
    """
    return configure_module(sys.modules[__name__], user_file=user_file or user_config_file('groundlink'))
