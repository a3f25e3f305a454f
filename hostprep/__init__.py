"""hostprep — provision a development host with a fixed toolchain."""

__version__ = "0.1.0"
