"""Application framework, event broker, logger, queues, value types, PWM helpers and key/value storage for embedded-style programs."""

__version__ = "0.1.0"