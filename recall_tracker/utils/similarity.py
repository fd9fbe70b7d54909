"""
Edit-distance based string similarity used by the fuzzy search tier.
"""

from typing import List


def levenshtein_distance(a: str, b: str) -> int:
    """
    Compute the Levenshtein edit distance between two strings.

    Insertions, deletions and substitutions each cost 1. The full
    (len(a)+1) x (len(b)+1) matrix is built.

    Args:
        a: First string
        b: Second string

    Returns:
        Minimum number of single-character edits turning a into b
    """
    rows = len(a) + 1
    cols = len(b) + 1
    matrix: List[List[int]] = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        matrix[i][0] = i
    for j in range(cols):
        matrix[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,         # deletion
                matrix[i][j - 1] + 1,         # insertion
                matrix[i - 1][j - 1] + cost   # substitution
            )

    return matrix[rows - 1][cols - 1]


def similarity(a: str, b: str) -> float:
    """
    Normalized similarity between two strings, case-insensitive.

    Args:
        a: First string
        b: Second string

    Returns:
        A score in [0, 1]; 0.0 when either string is empty
    """
    if not a or not b:
        return 0.0

    a, b = a.lower(), b.lower()
    distance = levenshtein_distance(a, b)
    return 1.0 - distance / max(len(a), len(b))
