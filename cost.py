from typing import Sequence


def mse(out_true: Sequence[float], out_pred: Sequence[float], sample_size: int) -> float:
    """Erro quadrático médio entre os valores esperados e os preditos.

    Não valida tamanhos: sequências menores que `sample_size` falham com
    IndexError no primeiro acesso desalinhado.
    """
    sum_squared_errors = 0.0
    for i in range(sample_size):
        sum_squared_errors += (out_pred[i] - out_true[i]) ** 2
    return sum_squared_errors / sample_size
