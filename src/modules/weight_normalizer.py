"""
Step 2: Weight normalization
"""

from typing import List, Sequence

import numpy as np

from ..utils.exceptions import DegenerateInputError


def normalize(weights: Sequence[float]) -> List[float]:
    """
    Scale *weights* so they sum to 1, preserving order.

    Raises:
        DegenerateInputError: If *weights* is empty or does not sum to a
            positive number
    """
    values = np.asarray(weights, dtype=float)
    if values.size == 0:
        raise DegenerateInputError("Cannot normalize an empty weight vector")

    total = values.sum()
    if not total > 0:
        raise DegenerateInputError(f"Weights must sum to a positive number, got {total}")

    return (values / total).tolist()
