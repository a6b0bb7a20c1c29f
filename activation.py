import math
from typing import Callable, Dict, Union


class Activation:
    """Função de ativação escalar identificada por nome."""

    def __init__(self, name: str, fn: Callable[[float], float]):
        self.name = name
        self.fn = fn

    @classmethod
    def custom(cls, fn: Callable[[float], float], name: str = 'custom') -> 'Activation':
        return cls(name, fn)

    def __deepcopy__(self, memo):
        # imutável: cópias de neurônios compartilham a mesma instância
        return self

    def __call__(self, x: float) -> float:
        return self.fn(x)

    def __repr__(self) -> str:
        return f"Activation({self.name})"


def identity(x: float) -> float:
    return x


def sigmoid(x: float) -> float:
    # forma estável: exp só recebe argumentos <= 0
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def relu(x: float) -> float:
    return x if x > 0 else 0.0


IDENTITY = Activation('identity', identity)
SIGMOID = Activation('sigmoid', sigmoid)
RELU = Activation('relu', relu)

ACTIVATIONS: Dict[str, Activation] = {a.name: a for a in (IDENTITY, SIGMOID, RELU)}


def get_activation(activation: Union[str, Activation]) -> Activation:
    if isinstance(activation, Activation):
        return activation
    name = activation.lower()
    if name not in ACTIVATIONS:
        raise ValueError('unknown activation')
    return ACTIVATIONS[name]
