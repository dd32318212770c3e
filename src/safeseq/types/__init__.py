from .view import SequenceSnapshot

__all__ = ['SequenceSnapshot']
