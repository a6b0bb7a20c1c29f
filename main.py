import random
import sys
from typing import List, Optional

from cost import mse
from loader import Loader
from sample_sets import DATASETS, binary_classification
from network import Network
from neuron import Neuron
from trainer import ITERATIONS, compute_cost, train, train_network

USAGE = "uso: python main.py [classificacao|regressao|rede|viewer|csv <arquivo> [identity|sigmoid]]"


def print_neuron(neuron: Neuron, cost: float):
    print(f"O custo do neurônio : {cost}")
    for i, w in enumerate(neuron.weights):
        print(f"O valor do weight {i + 1} : {w}")
    print(f"O valor do bias     : {neuron.bias}")


def report_training(neuron: Neuron, x, y, iterations: int):
    sample_size = len(x)
    print("***Antes do treinamento***")
    print_neuron(neuron, compute_cost(neuron, x, y, mse, sample_size))

    for _ in range(iterations):
        train(neuron, mse, x, y, sample_size)

    print("***Depois do treinamento***")
    print_neuron(neuron, compute_cost(neuron, x, y, mse, sample_size))

    print("*** Testes ***")
    for xi in x:
        print(f"Entrada {' '.join(f'{v:g}' for v in xi)} - Saída {neuron.compute_out(xi)}")


def run_neuron(dataset_name: str, iterations: int = ITERATIONS, rng: Optional[random.Random] = None) -> Neuron:
    dataset = DATASETS[dataset_name]
    x, y = dataset['samples']()
    neuron = Neuron(dataset['activation'], len(x[0]), rng=rng)
    report_training(neuron, x, y, iterations)
    return neuron


def run_csv(
    path: str,
    activation: str = 'identity',
    iterations: int = ITERATIONS,
    rng: Optional[random.Random] = None,
) -> Neuron:
    data = Loader(path)
    x, y = data.samples()
    if not x:
        raise ValueError(f"nenhuma amostra válida em {path}")
    print(f"dados carregados: features={data.feature_count} amostras={len(x)}")
    neuron = Neuron(activation, len(x[0]), rng=rng)
    report_training(neuron, x, y, iterations)
    return neuron


def run_network(iterations: int = 2000, rng: Optional[random.Random] = None) -> Network:
    x, y = binary_classification()
    sample_size = len(x)
    net = Network([len(x[0]), 2, 1], 'sigmoid', 'sigmoid', rng=rng)
    print(f"rede criada: {net.summary()}")
    print(f"custo antes : {compute_cost(net, x, y, mse, sample_size)}")
    for _ in range(iterations):
        train_network(net, mse, x, y, sample_size)
    print(f"custo depois: {compute_cost(net, x, y, mse, sample_size)}")
    for xi in x:
        print(f"Entrada {' '.join(f'{v:g}' for v in xi)} - Saída {net.compute_out(xi)[0]}")
    return net


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    mode = args[0] if args else 'classificacao'
    if mode in DATASETS:
        run_neuron(mode)
    elif mode == 'rede':
        run_network()
    elif mode == 'csv' and len(args) >= 2:
        run_csv(args[1], args[2] if len(args) > 2 else 'identity')
    elif mode == 'viewer':
        from qt_viewer import launch_qt_viewer
        return launch_qt_viewer()
    else:
        print(USAGE)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
