# graph/errors.py

class GraphError(ValueError):
    """Raised when a graph payload from the editor cannot be turned into a Graph."""
    pass
