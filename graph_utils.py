from typing import Any, Dict, List, Optional

from network import Network


def add_layer(network: Network, size: int, position: Optional[int] = None) -> None:
    """Insere uma camada oculta; a rede é reconstruída com pesos novos."""
    sizes = list(network.layer_sizes)
    if position is None:
        position = len(sizes) - 1
    if position < 1 or position > len(sizes) - 1:
        raise ValueError("posição inválida")
    sizes.insert(position, size)
    network.rebuild(sizes)


def remove_layer(network: Network, index: int) -> None:
    if index <= 0 or index >= len(network.layer_sizes) - 1:
        raise ValueError("não é permitido remover camada de entrada ou saída")
    sizes = list(network.layer_sizes)
    sizes.pop(index)
    network.rebuild(sizes)


def color(val: float) -> str:
    if abs(val) < 1e-9:
        return "#cccccc"
    ratio = min(1.0, abs(val))
    if val >= 0:  # azul positivo
        r = int(60 - 40 * ratio)
        g = int(140 - 60 * ratio)
        b = int(210 - 80 * ratio)
    else:  # vermelho negativo
        r = int(200 - 40 * (1 - ratio))
        g = int(60 - 40 * (1 - ratio))
        b = int(60 - 40 * (1 - ratio))
    return f"#{r:02x}{g:02x}{b:02x}"


def graph_data(network: Network, feature_names: Optional[List[str]] = None) -> Dict[str, Any]:
    """Nós e arestas para desenhar a rede.

    Camada 0 são as features de entrada. Sem compartilhamento, cópias de
    neurônios aparecem como nós separados (é a estrutura que o forward
    realmente percorre).
    """
    layer_spacing = 220.0
    y_spacing = 90.0
    n_layers = len(network.layer_sizes)
    names = feature_names or [f"x{i + 1}" for i in range(network.n_inputs)]

    # camada de cada neurônio pela profundidade a partir da saída
    by_layer: Dict[int, list] = {li: [] for li in range(n_layers)}
    seen = set()

    def visit(neuron, li):
        if id(neuron) in seen:
            return
        seen.add(id(neuron))
        by_layer[li].append(neuron)
        for up in neuron.upstream:
            visit(up, li - 1)

    for out in network.output_neurons:
        visit(out, n_layers - 1)

    neurons = [n for li in range(n_layers) for n in by_layer[li]]
    biases = [n.bias for n in neurons]
    weights = [w for n in neurons for w in n.weights]
    max_bias = max([abs(b) for b in biases] or [1.0])
    max_weight = max([abs(w) for w in weights] or [1.0])

    nodes = []
    edges = []
    input_ids = [f"in{i}" for i in range(network.n_inputs)]
    offset = -(network.n_inputs - 1) / 2.0
    for i, nid in enumerate(input_ids):
        nodes.append({
            "id": nid,
            "bias": 0.0,
            "layer": 0,
            "x": 0.0,
            "y": (offset + i) * y_spacing,
            "color": "#eeeeee",
            "width": 2.0,
            "label": names[i] if i < len(names) else nid,
        })

    for li in range(1, n_layers):
        layer = by_layer[li]
        offset = -(len(layer) - 1) / 2.0
        for ni, neuron in enumerate(layer):
            norm = abs(neuron.bias) / max_bias if max_bias else 0.0
            nodes.append({
                "id": neuron.id,
                "bias": neuron.bias,
                "layer": li,
                "x": li * layer_spacing,
                "y": (offset + ni) * y_spacing,
                "color": color(neuron.bias),
                "width": 2.0 + 8.0 * norm,
                "label": f"b={neuron.bias:.2f}",
            })
            sources = [up.id for up in neuron.upstream] if neuron.upstream else input_ids
            for source, w in zip(sources, neuron.weights):
                norm = abs(w) / max_weight if max_weight else 0.0
                edges.append({
                    "id": f"{source}->{neuron.id}",
                    "source": source,
                    "target": neuron.id,
                    "weight": w,
                    "color": color(w),
                    "width": 1.0 + 6.0 * norm,
                    "label": f"w={w:.2f}",
                })
    return {"nodes": nodes, "edges": edges}
