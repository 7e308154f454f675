"""bootfreeze — prepare a machine and freeze a Python script into one executable."""

__version__ = "0.1.0"
