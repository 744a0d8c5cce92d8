"""Client-facing session orchestration."""

__all__: list[str] = []
