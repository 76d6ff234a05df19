"""Levenshtein edit distance for fuzzy word matching."""


def levenshtein_distance(a: str, b: str) -> int:
    """Return the edit distance between ``a`` and ``b`` (unit-cost insert/delete/substitute).

    Rows of the DP table follow ``b``, columns follow ``a``; only the previous
    row is kept. Strings are compared code point by code point.
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(a) + 1))
    for i, b_char in enumerate(b, start=1):
        current = [i]
        for j, a_char in enumerate(a, start=1):
            cost = 0 if a_char == b_char else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]
