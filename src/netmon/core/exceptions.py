from __future__ import annotations


class NetmonError(Exception):
    """Base error for the network monitor."""


class ConfigError(NetmonError):
    pass


class CounterSourceError(NetmonError):
    """The OS could not enumerate interface byte counters."""


class AddressSourceError(NetmonError):
    """The OS could not enumerate interface addresses."""


class SignalSetupError(NetmonError):
    pass


class OutputError(NetmonError):
    pass
