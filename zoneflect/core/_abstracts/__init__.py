from .nxgraph import _BaseGraph

__all__ = ["_BaseGraph"]
