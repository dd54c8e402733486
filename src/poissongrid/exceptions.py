"""
Exception hierarchy for poissongrid.

Configuration errors come from the properties loader, assembly errors are
programming errors inside the stencil assembler, and unsolvable-system errors
are raised at the solver boundary only.
"""


class PoissonGridError(Exception):
    """Base class for all errors raised by poissongrid."""


class ConfigurationError(PoissonGridError, ValueError):
    """The properties file is missing, malformed or describes an invalid problem."""


class AssemblyError(PoissonGridError, AssertionError):
    """An assembly invariant (e.g. index flattening) was violated."""


class UnsolvableSystemError(PoissonGridError, RuntimeError):
    """The assembled system cannot be factorized as symmetric positive definite."""
