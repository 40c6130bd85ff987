"""Exceptions raised outside the calculation engine"""


class ObfusCalcError(Exception):
    """Base class for ObfusCalc errors"""


class ConfigurationError(ObfusCalcError):
    """Raised when a configuration source cannot produce a Configuration"""


class CommandParseError(ObfusCalcError):
    """Raised when an obfuscator command line cannot be parsed back"""
