"""Request/response translation core."""

__all__: list[str] = []
