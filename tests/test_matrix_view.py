import numpy as np

from mcmf.visualization.matrix_view import format_matrix


def test_layout_is_right_justified_to_width_five():
    text = format_matrix("Capacity", [[0, 7], [0, 0]])
    assert text.split("\n") == [
        " Capacity",
        "         0    1",
        "    0    0    7",
        "    1    0    0",
    ]


def test_negative_and_numpy_values():
    text = format_matrix("Edge cost", np.array([[0, 3, 0], [-3, 0, -12], [0, 12, 0]]))
    lines = text.split("\n")
    assert lines[2] == "    0    0    3    0"
    assert lines[3] == "    1   -3    0  -12"
    assert all(len(line) == 20 for line in lines[1:])
