from typing import Dict, List, Tuple

Samples = Tuple[List[List[float]], List[float]]


def linear_regression() -> Samples:
    """Amostras exatas de y = 3*x1 + 2*x2 + 5."""
    x = [
        [2.0, 15.0], [8.0, 3.0],
        [1.0, 1.0], [5.0, 7.0],
        [0.0, 4.0],
    ]
    y = [3.0 * a + 2.0 * b + 5.0 for a, b in x]
    return x, y


def binary_classification() -> Samples:
    """Duas classes linearmente separáveis (x1 grande -> 1, x2 grande -> 0)."""
    x = [
        [6.0, 1.0], [5.0, 0.0],
        [4.0, 1.0], [1.0, 4.0],
        [1.0, 2.0], [2.0, 3.0],
    ]
    y = [
        1.0, 1.0,
        1.0, 0.0,
        0.0, 0.0,
    ]
    return x, y


DATASETS: Dict[str, Dict] = {
    'regressao': {'samples': linear_regression, 'activation': 'identity'},
    'classificacao': {'samples': binary_classification, 'activation': 'sigmoid'},
}
