"""Treino por gradiente descendente com derivadas por diferenças finitas.

A derivada de cada parâmetro é medida, não calculada: o custo é avaliado com
o parâmetro deslocado de `EPSILON` e com o valor original, e a diferença é
dividida por `EPSILON`.
"""
from typing import Callable, List, Optional, Sequence, Union

from neuron import Neuron
from network import Network

EPSILON = 1e-4
LEARNING_RATE = 1e-3
ITERATIONS = 50000

CostFn = Callable[[Sequence[float], Sequence[float], int], float]
Model = Union[Neuron, Network]


class Param:
    """Referência a um parâmetro treinável: um peso (por índice) ou o bias."""

    WEIGHT = 'weight'
    BIAS = 'bias'

    def __init__(self, kind: str, index: Optional[int] = None):
        self.kind = kind
        self.index = index

    @classmethod
    def weight(cls, index: int) -> 'Param':
        return cls(cls.WEIGHT, index)

    @classmethod
    def bias(cls) -> 'Param':
        return cls(cls.BIAS)

    def get(self, neuron: Neuron) -> float:
        if self.kind == Param.WEIGHT:
            return neuron.weights[self.index]
        return neuron.bias

    def set(self, neuron: Neuron, value: float):
        if self.kind == Param.WEIGHT:
            neuron.weights[self.index] = value
        else:
            neuron.bias = value

    def __repr__(self) -> str:
        if self.kind == Param.WEIGHT:
            return f"Param(weight[{self.index}])"
        return "Param(bias)"


def compute_cost(model: Model, x, y, cost: CostFn, sample_size: int) -> float:
    """Custo do modelo sobre as `sample_size` primeiras amostras.

    Saídas em lista (redes) e alvos em lista são achatados antes de chamar
    a função de custo.
    """
    out_true: List[float] = []
    out_pred: List[float] = []
    for i in range(sample_size):
        pred = model.compute_out(x[i])
        if isinstance(pred, list):
            target = y[i] if isinstance(y[i], (list, tuple)) else [y[i]]
            out_pred.extend(pred)
            out_true.extend(target)
        else:
            out_pred.append(pred)
            out_true.append(y[i])
    return cost(out_true, out_pred, len(out_pred))


def compute_gradient(
    neuron: Neuron,
    cost: CostFn,
    x,
    y,
    param: Param,
    sample_size: int,
    model: Optional[Model] = None,
    eps: float = EPSILON,
) -> float:
    """Derivada parcial do custo em relação a `param` de `neuron`.

    `model` é quem gera as predições avaliadas (o próprio neurônio por
    padrão). O parâmetro é restaurado ao valor exato de antes da chamada.
    """
    model = neuron if model is None else model
    original = param.get(neuron)

    param.set(neuron, original + eps)
    variation_cost = compute_cost(model, x, y, cost, sample_size)

    param.set(neuron, original)
    normal_cost = compute_cost(model, x, y, cost, sample_size)

    return (variation_cost - normal_cost) / eps


def train(
    neuron: Neuron,
    cost: CostFn,
    x,
    y,
    sample_size: int,
    learning_rate: float = LEARNING_RATE,
    model: Optional[Model] = None,
):
    """Um passo de gradiente descendente: cada peso em ordem e depois o bias.

    As atualizações são sequenciais, então o gradiente de um peso já enxerga
    os pesos anteriores atualizados neste mesmo passo.
    """
    for i in range(neuron.n_connections):
        gradient = compute_gradient(neuron, cost, x, y, Param.weight(i), sample_size, model)
        neuron.weights[i] -= learning_rate * gradient

    gradient = compute_gradient(neuron, cost, x, y, Param.bias(), sample_size, model)
    neuron.bias -= learning_rate * gradient


def train_network(
    network: Network,
    cost: CostFn,
    x,
    y,
    sample_size: int,
    learning_rate: float = LEARNING_RATE,
):
    """Um passo de treino em todos os neurônios da rede, avaliando a rede inteira."""
    for neuron in list(network.neurons()):
        train(neuron, cost, x, y, sample_size, learning_rate, model=network)


def fit(
    model: Model,
    cost: CostFn,
    x,
    y,
    sample_size: int,
    iterations: int = ITERATIONS,
    learning_rate: float = LEARNING_RATE,
    callback: Optional[Callable[[int, float], None]] = None,
) -> List[float]:
    """Executa `iterations` passos de treino e devolve o custo após cada um."""
    history: List[float] = []
    for step in range(iterations):
        if isinstance(model, Network):
            train_network(model, cost, x, y, sample_size, learning_rate)
        else:
            train(model, cost, x, y, sample_size, learning_rate)
        current = compute_cost(model, x, y, cost, sample_size)
        history.append(current)
        if callback is not None:
            callback(step, current)
    return history
