import copy
import random
import uuid
from typing import Dict, List, Optional, Sequence, Union

from activation import Activation, get_activation


def randomize(rng: random.Random, low: float = -1.0, high: float = 1.0) -> float:
    """Valor uniforme no intervalo aberto (low, high)."""
    value = rng.uniform(low, high)
    while value <= low or value >= high:
        value = rng.uniform(low, high)
    return value


class Neuron:
    def __init__(
        self,
        activation: Union[str, Activation],
        n_connections: int,
        upstream: Optional[List['Neuron']] = None,
        rng: Optional[random.Random] = None,
        weights: Optional[Sequence[float]] = None,
        bias: Optional[float] = None,
    ):
        self.id = str(uuid.uuid4())
        self.activation = get_activation(activation)
        self.n_connections = n_connections
        self.upstream: List[Neuron] = list(upstream or [])
        if self.upstream and len(self.upstream) != n_connections:
            raise ValueError("upstream size mismatch")
        rng = rng or random.Random()
        if weights is None:
            self.weights = [randomize(rng) for _ in range(n_connections)]
        else:
            if len(weights) != n_connections:
                raise ValueError("weights size mismatch")
            self.weights = [float(w) for w in weights]
        self.bias = randomize(rng) if bias is None else float(bias)

    def compute_out(self, x: Sequence[float], cache: Optional[Dict[int, float]] = None) -> float:
        """Saída do neurônio para o vetor de entrada bruto `x`.

        Sem upstream a soma ponderada usa as features de `x` diretamente;
        com upstream, cada neurônio anterior recebe o mesmo `x` e a soma usa
        as saídas deles. `cache` (opcional) guarda saídas já calculadas para
        este mesmo `x`.
        """
        if cache is not None and id(self) in cache:
            return cache[id(self)]
        weighted_sum = 0.0
        if self.upstream:
            for i in range(self.n_connections):
                weighted_sum += self.upstream[i].compute_out(x, cache) * self.weights[i]
        else:
            for i in range(self.n_connections):
                weighted_sum += x[i] * self.weights[i]
        weighted_sum += self.bias
        out = self.activation(weighted_sum)
        if cache is not None:
            cache[id(self)] = out
        return out

    def copy(self) -> 'Neuron':
        """Cópia independente (pesos, bias e upstream inteiro)."""
        clone = copy.deepcopy(self)
        # cópias ganham ids novos para não colidirem no grafo
        for n in clone.walk():
            n.id = str(uuid.uuid4())
        return clone

    def walk(self):
        """Percorre este neurônio e os anteriores (pré-ordem, cada objeto uma vez)."""
        seen = set()
        stack = [self]
        while stack:
            n = stack.pop()
            if id(n) in seen:
                continue
            seen.add(id(n))
            yield n
            stack.extend(reversed(n.upstream))

    def __repr__(self) -> str:
        return f"Neuron({self.id[:4]}, {self.activation.name}, n={self.n_connections}, bias={self.bias:.3f})"
