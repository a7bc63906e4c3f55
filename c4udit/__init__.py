"""c4udit - regex-based static analyzer for Solidity contracts."""

__version__ = "0.2.0"


class C4uditError(Exception):
    """Base exception for all fatal c4udit errors."""
