"""Errors raised while scanning, reading and configuring SunnyBeam data runs."""


class SBLError(Exception): ...


class IngestError(SBLError): ...


class ScanError(SBLError): ...


class ConfigError(SBLError): ...


def require(condition: bool, message: str, exc: type[SBLError] = SBLError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
