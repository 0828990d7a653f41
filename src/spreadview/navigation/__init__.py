"""Directory chaining between sibling documents."""

from .directory_chain import DirectoryChain

__all__ = ["DirectoryChain"]
