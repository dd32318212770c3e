"""
SafeSequence: an ordered container that can be modified while a snapshot of it is iterated
"""
from .core.safe_sequence import SafeSequence
from .core.errors import SafeSeqError, IndexOutOfRange, ConfigError, ScenarioError
from .types.view import SequenceSnapshot

__all__ = [
    'SafeSequence',
    'SequenceSnapshot',
    'SafeSeqError',
    'IndexOutOfRange',
    'ConfigError',
    'ScenarioError',
]
