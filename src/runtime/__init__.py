"""Runtime package.

Keep this module dependency-light: importing `src.runtime.*` in unit tests
should not open network clients; `build_runtime_deps` does that explicitly.
"""

__all__: list[str] = []
