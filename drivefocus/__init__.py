__version__ = "0.1.0"

LOG_PREFIX = "[drivefocus]"
