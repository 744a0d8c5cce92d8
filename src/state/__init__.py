from .runtime import RuntimeDeps
from .settings import AppSettings
from .connection import ClientConnection

__all__ = ["AppSettings", "ClientConnection", "RuntimeDeps"]
