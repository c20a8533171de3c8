# mcmf/visualization/matrix_view.py
from typing import Sequence

CELL_WIDTH = 5


def format_matrix(label: str, matrix: Sequence[Sequence[int]]) -> str:
    """
    Renders a square matrix as a labeled table: the label, a row of column
    indices, then one line per row prefixed by its index. Every number is
    right-justified to a width of 5.
    """
    size = len(matrix)
    lines = [f" {label}"]
    lines.append(" " * CELL_WIDTH + "".join(f"{j:{CELL_WIDTH}d}" for j in range(size)))
    for i, row in enumerate(matrix):
        lines.append(f"{i:{CELL_WIDTH}d}" + "".join(f"{int(x):{CELL_WIDTH}d}" for x in row))
    return "\n".join(lines)
