from .router import codecs_route, library_route

__all__ = ["codecs_route", "library_route"]
