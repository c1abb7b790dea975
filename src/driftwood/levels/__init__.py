from .loader import DEFAULT_LEVEL, Level, load_level, parse_layers

__all__ = ["DEFAULT_LEVEL", "Level", "load_level", "parse_layers"]
