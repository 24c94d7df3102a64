from .base import Base
from .match import MatchRecord

__all__ = [
    'Base',
    'MatchRecord',
]
