"""Base contract enforcement utilities.

The require() function is the single enforcement mechanism for all contracts.
"""

from seriescache.contracts.failure import ContractViolation


def require(condition: bool, message: str, error: type = ContractViolation) -> None:
    """Enforce a cache contract.

    Parameters
    ----------
    condition : bool
        The invariant that must be true.

    message : str
        Error message explaining the contract violation (for debugging).

    error : type, optional
        ContractViolation subclass to raise (default ContractViolation).

    Raises
    ------
    ContractViolation
        If condition is False.

    Examples
    --------
    >>> require(len(values) <= policy.limit, "Series contract: over limit")
    >>> require(c1.names == c2.names, "Merge contract: series differ", MergeShapeMismatch)
    """
    if not condition:
        raise error(message)
