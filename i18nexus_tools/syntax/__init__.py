from .backends import BACKEND_NAMES, get_backend
from .tree import SKIP, Node, SyntaxTree, find_first, iter_nodes, render, rewrite

__all__ = [
    "BACKEND_NAMES",
    "get_backend",
    "SKIP",
    "Node",
    "SyntaxTree",
    "find_first",
    "iter_nodes",
    "render",
    "rewrite",
]
