from .scope import SessionScope
from .events import SessionEvents
from .session import UpstreamSession
from .factory import SessionFactory

__all__ = ["SessionEvents", "SessionFactory", "SessionScope", "UpstreamSession"]
