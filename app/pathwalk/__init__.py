"""pathwalk - filesystem traversal, filtering, reading and deletion.

Symlink-aware tree walking with a pluggable visitor, recursive deletion,
extension filtering, and whole-stream reads for files and zip/jar entries.
"""

__version__ = "0.1.0"
