"""Tool catalog, dispatch and the collaborators behind each tool."""

__all__: list[str] = []
