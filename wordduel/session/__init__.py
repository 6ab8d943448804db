from .background import BackgroundRunner
from .session import GuessSession

__all__ = ["BackgroundRunner", "GuessSession"]
