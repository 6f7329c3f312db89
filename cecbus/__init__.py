"""HDMI-CEC control protocol layer."""

__version__ = "0.1.0"
