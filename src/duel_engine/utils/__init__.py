from .random_provider import RandomProvider

__all__ = ["RandomProvider"]
