import random
from typing import List, Optional, Union

from activation import Activation
from neuron import Neuron


class Layer:
    def __init__(
        self,
        size: int,
        activation: Union[str, Activation],
        n_connections: int,
        previous: Optional['Layer'] = None,
        rng: Optional[random.Random] = None,
        shared: bool = False,
    ):
        self.neurons: List[Neuron] = []
        for _ in range(size):
            if previous is None:
                upstream = []
            elif shared:
                upstream = list(previous.neurons)
            else:
                upstream = [n.copy() for n in previous.neurons]
            self.neurons.append(Neuron(activation, n_connections, upstream, rng))

    def outputs(self, x, cache=None) -> List[float]:
        return [n.compute_out(x, cache) for n in self.neurons]

    def __len__(self) -> int:
        return len(self.neurons)

    def __iter__(self):
        return iter(self.neurons)

    def __repr__(self) -> str:
        return f"Layer(size={len(self.neurons)})"
