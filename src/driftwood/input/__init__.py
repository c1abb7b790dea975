from .bindings import KeyBindings

__all__ = ["KeyBindings"]
