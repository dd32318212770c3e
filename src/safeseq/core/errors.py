__all__ = ['SafeSeqError', 'IndexOutOfRange', 'ConfigError', 'ScenarioError']


class SafeSeqError(Exception):
    """
    Base class of all safeseq errors
    """


class IndexOutOfRange(SafeSeqError, IndexError):
    """
    Raised when an index is negative or not smaller than the current length.
    The container is left untouched when this is raised.
    """

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"Index {index} is out of range for length {length}!")


class ConfigError(SafeSeqError, ValueError):
    """
    Invalid configuration file
    """


class ScenarioError(SafeSeqError, ValueError):
    """
    Invalid scenario file
    """
