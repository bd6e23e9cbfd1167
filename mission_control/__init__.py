"""Mission Control: real-time agent status dashboard and lifecycle bridge."""

__version__ = "0.1.0"
