import random

import pytest

from cost import mse
from sample_sets import binary_classification, linear_regression
from network import Network
from neuron import Neuron
from trainer import (
    EPSILON, ITERATIONS, LEARNING_RATE, Param, compute_cost, compute_gradient, fit, train, train_network,
)


def test_constants():
    assert EPSILON == 1e-4
    assert LEARNING_RATE == 1e-3
    assert ITERATIONS == 50000


def test_param_get_set():
    n = Neuron('identity', 2, weights=[1.0, 2.0], bias=3.0)
    w1 = Param.weight(1)
    b = Param.bias()
    assert w1.get(n) == 2.0
    assert b.get(n) == 3.0
    w1.set(n, 7.0)
    b.set(n, -1.0)
    assert n.weights == [1.0, 7.0]
    assert n.bias == -1.0
    assert repr(w1) == "Param(weight[1])"
    assert repr(b) == "Param(bias)"


def test_compute_cost_single_neuron():
    n = Neuron('identity', 1, weights=[1.0], bias=0.0)
    assert compute_cost(n, [[1.0], [2.0]], [2.0, 2.0], mse, 2) == pytest.approx(0.5)


def test_gradient_sign_matches_analytic():
    n = Neuron('identity', 1, weights=[0.5], bias=0.0)
    x = [[2.0]]
    y = [10.0]
    pred = n.compute_out(x[0])
    analytic = 2 * (pred - y[0]) * x[0][0]
    estimated = compute_gradient(n, mse, x, y, Param.weight(0), 1)
    assert estimated < 0 and analytic < 0
    assert estimated == pytest.approx(analytic, abs=1e-2)


def test_bias_gradient():
    n = Neuron('identity', 1, weights=[0.0], bias=4.0)
    estimated = compute_gradient(n, mse, [[1.0]], [1.0], Param.bias(), 1)
    assert estimated == pytest.approx(2 * (4.0 - 1.0), abs=1e-2)


def test_gradient_restores_parameters(rng):
    x, y = binary_classification()
    n = Neuron('sigmoid', 2, rng=rng)
    weights = list(n.weights)
    bias = n.bias
    for param in (Param.weight(0), Param.weight(1), Param.bias()):
        compute_gradient(n, mse, x, y, param, len(x))
        assert n.weights == weights
        assert n.bias == bias


def test_gradient_restores_parameters_inside_network(rng):
    x, y = binary_classification()
    net = Network([2, 2, 1], 'sigmoid', 'sigmoid', rng=rng)
    before = [(list(n.weights), n.bias) for n in net.neurons()]
    hidden = list(net.neurons())[-1]
    compute_gradient(hidden, mse, x, y, Param.weight(1), len(x), model=net)
    compute_gradient(hidden, mse, x, y, Param.bias(), len(x), model=net)
    assert [(list(n.weights), n.bias) for n in net.neurons()] == before


def test_train_step_moves_against_gradient():
    n = Neuron('identity', 1, weights=[0.5], bias=0.0)
    x = [[2.0]]
    y = [10.0]
    before = compute_cost(n, x, y, mse, 1)
    train(n, mse, x, y, 1)
    assert n.weights[0] > 0.5
    assert n.bias > 0.0
    assert compute_cost(n, x, y, mse, 1) < before


def test_train_updates_weights_sequentially():
    # o gradiente do bias já enxerga o peso atualizado
    n = Neuron('identity', 1, weights=[0.0], bias=0.0)
    x = [[1.0]]
    y = [1.0]
    probe = Neuron('identity', 1, weights=[0.0], bias=0.0)
    g_w = compute_gradient(probe, mse, x, y, Param.weight(0), 1)
    probe.weights[0] -= LEARNING_RATE * g_w
    g_b = compute_gradient(probe, mse, x, y, Param.bias(), 1)
    probe.bias -= LEARNING_RATE * g_b
    train(n, mse, x, y, 1)
    assert n.weights == probe.weights
    assert n.bias == probe.bias


def test_linear_regression_converges():
    x, y = linear_regression()
    n = Neuron('identity', 2, rng=random.Random(42))
    for _ in range(ITERATIONS):
        train(n, mse, x, y, len(x))
    assert compute_cost(n, x, y, mse, len(x)) < 1e-2
    assert n.weights[0] == pytest.approx(3.0, abs=0.5)
    assert n.weights[1] == pytest.approx(2.0, abs=0.5)
    assert n.bias == pytest.approx(5.0, abs=0.5)


def test_binary_classification_converges():
    x, y = binary_classification()
    n = Neuron('sigmoid', 2, rng=random.Random(42))
    for _ in range(ITERATIONS):
        train(n, mse, x, y, len(x))
    for xi, label in zip(x, y):
        out = n.compute_out(xi)
        assert abs(out - label) < 0.3
        assert (out >= 0.5) == (label == 1.0)


def test_train_network_reduces_cost(rng):
    x, y = binary_classification()
    net = Network([2, 2, 1], 'sigmoid', 'sigmoid', rng=rng)
    before = compute_cost(net, x, y, mse, len(x))
    for _ in range(300):
        train_network(net, mse, x, y, len(x))
    assert compute_cost(net, x, y, mse, len(x)) < before


def test_train_network_shared_keeps_topology(rng):
    x, y = binary_classification()
    net = Network([2, 2, 2], 'sigmoid', 'identity', rng=rng, shared=True)
    hidden = net.output_neurons[0].upstream[0]
    weights = list(hidden.weights)
    train_network(net, mse, x, [[v, v] for v in y], len(x))
    assert net.output_neurons[1].upstream[0] is hidden
    assert hidden.weights != weights


def test_compute_cost_flattens_network_outputs():
    net = Network([1, 2], 'sigmoid', 'identity', rng=random.Random(3))
    for n in net.output_neurons:
        n.weights = [1.0]
        n.bias = 0.0
    # saídas [x, x] contra alvos [x, x + 2]
    cost = compute_cost(net, [[1.0], [3.0]], [[1.0, 3.0], [3.0, 5.0]], mse, 2)
    assert cost == pytest.approx(2.0)


def test_fit_reports_history(rng):
    x, y = linear_regression()
    n = Neuron('identity', 2, rng=rng)
    seen = []
    history = fit(n, mse, x, y, len(x), iterations=20, callback=lambda step, c: seen.append((step, c)))
    assert len(history) == 20
    assert [s for s, _ in seen] == list(range(20))
    assert history[-1] == compute_cost(n, x, y, mse, len(x))
    assert history[-1] < history[0]


def test_fit_dispatches_on_network(rng):
    x, y = binary_classification()
    net = Network([2, 2, 1], 'sigmoid', 'sigmoid', rng=rng)
    history = fit(net, mse, x, y, len(x), iterations=5)
    assert len(history) == 5
