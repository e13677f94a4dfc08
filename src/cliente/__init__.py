"""Cliente backend: identity, authentication use cases and metering devices."""
