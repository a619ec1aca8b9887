class InvalidInputError(ValueError):
    """Raised when the caller supplies points, matrices or bounds the core cannot work with."""


class SingularMatrixError(InvalidInputError):
    """Raised when a linear system or affine matrix is not invertible."""
