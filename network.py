import random
from typing import Iterator, List, Optional, Sequence, Union

from activation import Activation, IDENTITY, SIGMOID, get_activation
from layer import Layer
from neuron import Neuron


class Network:
    """Rede em camadas vista a partir dos neurônios de saída.

    Cada neurônio de uma camada lê os neurônios da camada anterior como
    upstream. Com `shared=False` (padrão) cada um guarda a própria cópia da
    camada anterior, então o treino ajusta cada ramo separadamente; com
    `shared=True` todos referenciam as mesmas instâncias.
    """

    def __init__(
        self,
        layer_sizes: List[int],
        hidden_activation: Union[str, Activation] = SIGMOID,
        output_activation: Union[str, Activation] = IDENTITY,
        rng: Optional[random.Random] = None,
        shared: bool = False,
    ):
        self.hidden_activation = get_activation(hidden_activation)
        self.output_activation = get_activation(output_activation)
        self.shared = shared
        self.rng = rng or random.Random()
        self.layer_sizes: List[int] = []
        self.output_layer: Optional[Layer] = None
        self._build(layer_sizes)

    def _build(self, layer_sizes: List[int]):
        if len(layer_sizes) < 2:
            raise ValueError("at least input and output")
        if any(s < 1 for s in layer_sizes):
            raise ValueError("layer sizes must be positive")
        # a camada de entrada não tem neurônios: são as features de x
        previous: Optional[Layer] = None
        n_layers = len(layer_sizes)
        for i in range(1, n_layers):
            act = self.hidden_activation if i < n_layers - 1 else self.output_activation
            previous = Layer(layer_sizes[i], act, layer_sizes[i - 1], previous, self.rng, self.shared)
        self.layer_sizes = list(layer_sizes)
        self.output_layer = previous

    def rebuild(self, layer_sizes: Optional[List[int]] = None):
        """Reconstrói a rede (pesos novos) com os mesmos parâmetros ou outros tamanhos."""
        self._build(self.layer_sizes if layer_sizes is None else layer_sizes)

    @property
    def output_neurons(self) -> List[Neuron]:
        return self.output_layer.neurons

    @property
    def n_inputs(self) -> int:
        return self.layer_sizes[0]

    @property
    def n_outputs(self) -> int:
        return self.layer_sizes[-1]

    def compute_out(self, x: Sequence[float]) -> List[float]:
        # um cache por vetor de entrada
        return self.output_layer.outputs(x, {})

    def neurons(self) -> Iterator[Neuron]:
        """Todos os neurônios distintos, em pré-ordem a partir das saídas."""
        seen = set()
        for out in self.output_neurons:
            for n in out.walk():
                if id(n) not in seen:
                    seen.add(id(n))
                    yield n

    def parameter_count(self) -> int:
        return sum(n.n_connections + 1 for n in self.neurons())

    def summary(self) -> str:
        parts = []
        parts.append("layers:" + ", ".join(str(s) for s in self.layer_sizes))
        parts.append(f"neurons:{sum(1 for _ in self.neurons())}")
        parts.append(f"params:{self.parameter_count()}")
        if self.shared:
            parts.append("shared")
        return " | ".join(parts)

    def __repr__(self) -> str:
        return f"Network({self.summary()})"
