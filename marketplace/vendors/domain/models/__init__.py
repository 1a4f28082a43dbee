from .business import Business


__all__ = ["Business"]
