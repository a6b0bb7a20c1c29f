import pytest

from graph_utils import add_layer, color, graph_data, remove_layer
from network import Network


def test_graph_data_shared(rng):
    net = Network([2, 2, 1], rng=rng, shared=True)
    data = graph_data(net, feature_names=["a", "b"])
    assert len(data["nodes"]) == 2 + 2 + 1
    assert len(data["edges"]) == 2 * 2 + 2
    inputs = [n for n in data["nodes"] if n["layer"] == 0]
    assert [n["label"] for n in inputs] == ["a", "b"]
    out = net.output_neurons[0]
    into_out = [e for e in data["edges"] if e["target"] == out.id]
    assert [e["weight"] for e in into_out] == out.weights


def test_graph_data_shows_owned_copies(rng):
    net = Network([2, 2, 2], rng=rng)
    data = graph_data(net)
    assert len([n for n in data["nodes"] if n["layer"] == 1]) == 4
    assert len([n for n in data["nodes"] if n["layer"] == 2]) == 2
    assert len(data["edges"]) == 2 * 2 + 4 * 2
    ids = {n["id"] for n in data["nodes"]}
    assert all(e["source"] in ids and e["target"] in ids for e in data["edges"])


def test_add_and_remove_layer(rng):
    net = Network([2, 1], rng=rng)
    add_layer(net, 3)
    assert net.layer_sizes == [2, 3, 1]
    add_layer(net, 4, 1)
    assert net.layer_sizes == [2, 4, 3, 1]
    remove_layer(net, 2)
    assert net.layer_sizes == [2, 4, 1]
    with pytest.raises(ValueError):
        add_layer(net, 2, 0)
    with pytest.raises(ValueError):
        remove_layer(net, 0)
    with pytest.raises(ValueError):
        remove_layer(net, 2)


def test_color():
    assert color(0.0) == "#cccccc"
    assert color(1.0) != color(-1.0)
