from .router import evaluator_route

__all__ = ["evaluator_route"]
