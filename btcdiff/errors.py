"""Exceptions raised by the difficulty converter core"""


class ConverterError(ValueError):
    """
    Parent class for conversion errors
    """
    pass


class InvalidDifficultyError(ConverterError):
    """
    For a difficulty that is not a positive, finite number
    """
    pass


class InvalidRangeError(ConverterError):
    """
    For a leading-zero count outside [0, 255]
    """
    pass


class InvalidTargetError(ConverterError):
    """
    For nBits encodings of negative or out of range targets
    """
    pass


class InvalidUnitError(ConverterError):
    """
    For difficulty unit tags that are not in DIFFICULTY_UNITS
    """
    pass
