# ABOUTME: Normalized edit-distance similarity between two strings.
# ABOUTME: Used by the tiered matcher to pair books whose titles are close but not equal.


def edit_distance(s: str, t: str) -> int:
    """Levenshtein distance with unit cost for insert, delete, and substitute."""
    rows, cols = len(s) + 1, len(t) + 1
    table = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        table[i][0] = i
    for j in range(cols):
        table[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if s[i - 1] == t[j - 1] else 1
            table[i][j] = min(
                table[i - 1][j] + 1,
                table[i][j - 1] + 1,
                table[i - 1][j - 1] + cost,
            )

    return table[-1][-1]


def similarity(s: str | None, t: str | None) -> float:
    """Case-insensitive similarity in [0.0, 1.0] based on edit distance.

    Computed as 1 - distance / max(len(s), len(t)). An empty or missing
    string on either side carries no usable signal and scores 0.0, including
    the empty-vs-empty case.
    """
    if not s or not t:
        return 0.0

    s = s.casefold()
    t = t.casefold()
    return 1.0 - edit_distance(s, t) / max(len(s), len(t))
