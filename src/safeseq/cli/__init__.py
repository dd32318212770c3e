from .app import app
from . import commands

__all__ = ['app', 'commands']
