# src/breadboard_core/solver/solver.py
import logging
import numpy as np
import scipy.sparse as sp
import scipy.sparse.linalg as splinalg
from typing import Optional

from .exceptions import SingularMatrixError

logger = logging.getLogger(__name__)

def factorize_mna_matrix(A: sp.csc_matrix, netlist_name: Optional[str] = None) -> splinalg.SuperLU:
    """
    Factorizes the reduced DC MNA matrix using sparse LU decomposition.

    Args:
        A: The square reduced MNA matrix (CSC format).
        netlist_name: Name of the netlist being solved, for context.

    Returns:
        The LU factorization object (splinalg.SuperLU).

    Raises:
        SingularMatrixError: A diagnosable error if the matrix is singular.
        TypeError: If input is not a sparse matrix.
    """
    if not sp.issparse(A):
        raise TypeError("Input A must be a SciPy sparse matrix.")
    if A.shape[0] != A.shape[1]:
        raise ValueError("Reduced MNA matrix must be square.")

    logger.debug(f"Factorizing DC MNA matrix ({A.shape}) for '{netlist_name}'...")
    try:
        lu = splinalg.splu(A.tocsc())
        logger.debug("LU factorization successful.")
        return lu
    except RuntimeError as e:
        logger.error(f"LU factorization failed for '{netlist_name}', matrix appears singular: {e}")
        raise SingularMatrixError(details=str(e), netlist_name=netlist_name) from e

def solve_mna_system(lu_factorization: splinalg.SuperLU, b: np.ndarray,
                     netlist_name: Optional[str] = None) -> np.ndarray:
    """
    Solves the reduced MNA system using a pre-computed LU factorization.
    """
    if not isinstance(lu_factorization, splinalg.SuperLU):
        raise TypeError("lu_factorization must be a SuperLU object from splinalg.splu.")

    logger.debug("Solving DC MNA system using LU factorization...")
    x = lu_factorization.solve(b)

    if np.any(np.isnan(x)) or np.any(np.isinf(x)):
        logger.error("NaN or Inf detected in MNA solution vector.")
        raise SingularMatrixError(details="MNA system solve resulted in NaN/Inf values.", netlist_name=netlist_name)

    return x
