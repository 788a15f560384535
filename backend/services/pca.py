"""2-D projection of embeddings via dual (Gram-matrix) PCA.

With N points in D dimensions and N << D (1 resume + up to 50 jobs,
384 dims), the N x N Gram matrix of the centered data is much cheaper
than the D x D covariance matrix. If Xc = U S V^T then G = Xc Xc^T =
U S^2 U^T, so the top eigenvectors of G scaled by sqrt(eigenvalue) are
exactly the PCA scores U S.

The top two eigenpairs are found by power iteration with deflation.
Eigenvector signs are arbitrary; only relative positions are meaningful.
"""

import logging
from collections.abc import Sequence
from typing import NamedTuple

import numpy as np

logger = logging.getLogger(__name__)

POWER_ITERATIONS = 20
COLLAPSE_EPSILON = 1e-9


class PCACoordinate(NamedTuple):
    x: float
    y: float


def power_iteration(
    matrix: np.ndarray,
    iterations: int = POWER_ITERATIONS,
    rng: np.random.Generator | None = None,
    start: Sequence[float] | None = None,
) -> np.ndarray:
    """Approximate the dominant eigenvector of a symmetric matrix.

    Starts from `start` when given, otherwise from a random vector drawn
    from `rng`. Stops early if the iterate collapses to ~0.
    """
    n = matrix.shape[0]
    if start is not None:
        v = np.asarray(start, dtype=np.float64)
    else:
        rng = rng if rng is not None else np.random.default_rng()
        v = rng.random(n) - 0.5

    magnitude = np.linalg.norm(v)
    if magnitude < COLLAPSE_EPSILON:
        return v
    v = v / magnitude

    for _ in range(iterations):
        w = matrix @ v
        magnitude = np.linalg.norm(w)
        if magnitude < COLLAPSE_EPSILON:
            logger.debug("Power iteration collapsed; matrix is rank deficient")
            break
        v = w / magnitude
    return v


def rayleigh_quotient(matrix: np.ndarray, v: np.ndarray) -> float:
    """v^T A v for a unit-length v."""
    return float(v @ (matrix @ v))


def gram_matrix(data: np.ndarray) -> np.ndarray:
    """Column-center the rows and return Xc Xc^T."""
    centered = data - data.mean(axis=0)
    return centered @ centered.T


def compute_pca(
    matrix: Sequence[Sequence[float]] | np.ndarray,
    rng: np.random.Generator | None = None,
    start_vectors: tuple[Sequence[float], Sequence[float]] | None = None,
    iterations: int = POWER_ITERATIONS,
) -> list[PCACoordinate]:
    """Project N row vectors onto their first two principal components.

    Coordinates come back in input order. Pass a seeded `rng` or explicit
    `start_vectors` for reproducible output. Degenerate input (identical
    rows) yields coordinates at the origin rather than an error.
    """
    data = np.asarray(matrix, dtype=np.float64)
    if data.size == 0 or data.ndim != 2:
        return []

    gram = gram_matrix(data)
    first_start, second_start = start_vectors if start_vectors is not None else (None, None)

    v1 = power_iteration(gram, iterations, rng=rng, start=first_start)
    lambda1 = rayleigh_quotient(gram, v1)

    deflated = gram - lambda1 * np.outer(v1, v1)
    v2 = power_iteration(deflated, iterations, rng=rng, start=second_start)
    lambda2 = rayleigh_quotient(deflated, v2)

    xs = v1 * np.sqrt(abs(lambda1))
    ys = v2 * np.sqrt(abs(lambda2))
    return [PCACoordinate(float(x), float(y)) for x, y in zip(xs, ys)]
