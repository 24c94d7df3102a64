from database.repositories.match import MatchRepository

__all__ = [
    'MatchRepository',
]
