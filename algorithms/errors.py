# algorithms/errors.py

class AlgorithmError(Exception):
    """Base class for everything the algorithm layer refuses to do."""
    pass


class UnknownAlgorithmError(AlgorithmError):
    """Raised when a registry key does not name one of the engines."""

    def __init__(self, key: str):
        super().__init__(f"Unknown algorithm: {key}")
        self.key = key


class AlgorithmRequestError(AlgorithmError):
    """Raised when a run request breaks a caller-side precondition."""
    pass
