from typing import Dict, Any, List, Optional
from PyQt6.QtWidgets import (
    QGraphicsScene, QGraphicsView, QGraphicsEllipseItem, QGraphicsLineItem, QGraphicsTextItem, QGraphicsPolygonItem,
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton,
    QSpinBox, QLabel, QFrame, QMessageBox, QLineEdit, QComboBox, QDoubleSpinBox, QCheckBox
)
from PyQt6.QtGui import QBrush, QPen, QColor, QPainter, QPolygonF
from PyQt6.QtCore import Qt, QPointF, QTimer

from activation import ACTIVATIONS
from cost import mse
from sample_sets import DATASETS
from graph_utils import graph_data, add_layer, remove_layer
from network import Network
from trainer import LEARNING_RATE, compute_cost, train_network

# passos de treino por tick do timer
TRAIN_CHUNK = 250


class GraphNodeItem(QGraphicsEllipseItem):
    def __init__(self, node: Dict[str, Any]):
        size = node['width'] * 8.0
        super().__init__(-size/2, -size/2, size, size)
        self.node_id = node['id']
        self.bias = node.get('bias', 0.0)
        self.setBrush(QBrush(QColor(node['color'])))
        pen = QPen(QColor('#555555'))
        pen.setWidthF(1.0)
        self.setPen(pen)
        self.setToolTip(node['label'])
        self.setPos(QPointF(node['x'], node['y']))
        self.label_item = QGraphicsTextItem(node['label'])
        self.label_item.setDefaultTextColor(QColor('#222222'))
        self.label_item.setPos(-self.label_item.boundingRect().width()/2, size/2 + 4)
        self.label_item.setParentItem(self)


class GraphEdgeItem(QGraphicsLineItem):
    def __init__(self, src: Dict[str, Any], dst: Dict[str, Any], edge: Dict[str, Any]):
        super().__init__(src['x'], src['y'], dst['x'], dst['y'])
        self.edge_id = edge['id']
        pen = QPen(QColor(edge['color']))
        pen.setWidthF(max(0.5, edge['width']))
        self.setPen(pen)
        self.setToolTip(edge['label'])
        self.setZValue(-2)
        mx = (src['x'] + dst['x']) / 2.0
        my = (src['y'] + dst['y']) / 2.0
        self.weight_label = QGraphicsTextItem(f"{edge['weight']:.3f}")
        self.weight_label.setDefaultTextColor(QColor('#111111'))
        self.weight_label.setPos(mx, my)
        self.weight_label.setZValue(10)
        self.weight_label.setVisible(False)
        # seta perto do destino
        dx = dst['x'] - src['x']
        dy = dst['y'] - src['y']
        length = (dx**2 + dy**2) ** 0.5 or 1.0
        ux, uy = dx / length, dy / length
        arrow_size = 10
        tip_x = dst['x'] - ux * 18
        tip_y = dst['y'] - uy * 18
        poly = QPolygonF([
            QPointF(tip_x, tip_y),
            QPointF(tip_x - uy * arrow_size/2 - ux * arrow_size, tip_y + ux * arrow_size/2 - uy * arrow_size),
            QPointF(tip_x + uy * arrow_size/2 - ux * arrow_size, tip_y - ux * arrow_size/2 - uy * arrow_size),
        ])
        self.arrow_item = QGraphicsPolygonItem(poly)
        self.arrow_item.setBrush(QBrush(QColor(edge['color'])))
        self.arrow_item.setPen(QPen(Qt.PenStyle.NoPen))
        self.arrow_item.setZValue(-1)
        self.setAcceptHoverEvents(True)

    def hoverEnterEvent(self, event):
        self.weight_label.setVisible(True)
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event):
        self.weight_label.setVisible(False)
        super().hoverLeaveEvent(event)


class GraphScene(QGraphicsScene):
    def __init__(self):
        super().__init__()
        self.setBackgroundBrush(QBrush(QColor('#ffffff')))
        self.node_items: List[GraphNodeItem] = []
        self.edge_items: List[GraphEdgeItem] = []
        self._output_labels: List[QGraphicsTextItem] = []

    def build(self, network: Network):
        self.clear()
        self.node_items.clear()
        self.edge_items.clear()
        self._output_labels.clear()
        data = graph_data(network)
        nodes_index = {n['id']: n for n in data['nodes']}
        for e in data['edges']:
            edge_item = GraphEdgeItem(nodes_index[e['source']], nodes_index[e['target']], e)
            self.addItem(edge_item)
            self.addItem(edge_item.weight_label)
            self.addItem(edge_item.arrow_item)
            self.edge_items.append(edge_item)
        output_layer = len(network.layer_sizes) - 1
        for n in data['nodes']:
            item = GraphNodeItem(n)
            self.node_items.append(item)
            self.addItem(item)
            if n['layer'] == output_layer:
                out_label = QGraphicsTextItem("")
                out_label.setDefaultTextColor(QColor('#0070f3'))
                out_label.setPos(item.x() + item.rect().width()/2 + 12, item.y() - 10)
                self.addItem(out_label)
                self._output_labels.append(out_label)
        self.setSceneRect(self.itemsBoundingRect().adjusted(-120, -120, 120, 120))

    def update_output_values(self, values: List[float]):
        for val, label in zip(values, self._output_labels):
            label.setPlainText(f"{val:.4f}")


class GraphView(QGraphicsView):
    def __init__(self, scene: GraphScene):
        super().__init__(scene)
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setDragMode(QGraphicsView.DragMode.ScrollHandDrag)
        self.scale_factor = 1.15

    def wheelEvent(self, event):
        if event.angleDelta().y() > 0:
            self.scale(self.scale_factor, self.scale_factor)
        else:
            self.scale(1 / self.scale_factor, 1 / self.scale_factor)


class CostChartWidget(QWidget):
    def __init__(self):
        super().__init__()
        self.history: List[float] = []
        self.setMinimumHeight(120)

    def set_history(self, values: List[float]):
        self.history = list(values)
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor('#fafafa'))
        if len(self.history) < 2:
            painter.end()
            return
        margin = 8
        chart_w = max(1, self.width() - 2*margin)
        chart_h = max(1, self.height() - 2*margin)
        min_v = min(self.history)
        max_v = max(self.history)
        rng = max(1e-9, (max_v - min_v))
        painter.setPen(QPen(QColor('#cccccc')))
        painter.drawRect(margin, margin, chart_w, chart_h)
        pen_line = QPen(QColor('#0070f3'))
        pen_line.setWidth(2)
        painter.setPen(pen_line)
        n = len(self.history)
        for i in range(1, n):
            x1 = margin + (i-1) * chart_w / (n-1)
            y1 = margin + chart_h - ((self.history[i-1] - min_v) / rng) * chart_h
            x2 = margin + i * chart_w / (n-1)
            y2 = margin + chart_h - ((self.history[i] - min_v) / rng) * chart_h
            painter.drawLine(int(x1), int(y1), int(x2), int(y2))
        painter.end()


class NetworkViewerWindow(QMainWindow):
    def __init__(self, dataset_name: str = 'classificacao'):
        super().__init__()
        self.setWindowTitle('Perceptron por diferenças finitas (PyQt)')
        self.scene = GraphScene()
        self.view = GraphView(self.scene)
        self.network: Optional[Network] = None
        self.x: List[List[float]] = []
        self.y: List[float] = []
        self._steps_done = 0
        self._steps_target = 0
        self._cost_history: List[float] = []
        self._play_timer = QTimer(self)
        self._play_timer.timeout.connect(self._on_play_tick)
        self._build_ui()
        self.combo_dataset.blockSignals(True)
        self.combo_dataset.setCurrentText(dataset_name)
        self.combo_dataset.blockSignals(False)
        self._load_dataset(dataset_name)

    def _build_ui(self):
        root = QWidget()
        layout = QHBoxLayout(root)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.addWidget(self.view, stretch=4)
        side = QVBoxLayout()
        layout.addLayout(side, stretch=1)

        side.addWidget(self._section_label('Dataset'))
        self.combo_dataset = QComboBox()
        self.combo_dataset.addItems(list(DATASETS))
        self.combo_dataset.currentTextChanged.connect(self._on_change_dataset)
        side.addWidget(self.combo_dataset)

        h_act = QHBoxLayout()
        h_act.addWidget(QLabel('Ativação oculta'))
        self.combo_hidden = QComboBox()
        self.combo_hidden.addItems(list(ACTIVATIONS))
        self.combo_hidden.setCurrentText('sigmoid')
        self.combo_hidden.currentTextChanged.connect(self._on_change_activation)
        h_act.addWidget(self.combo_hidden)
        side.addLayout(h_act)

        self.check_shared = QCheckBox('Camadas compartilhadas')
        self.check_shared.toggled.connect(self._on_change_activation)
        side.addWidget(self.check_shared)

        side.addWidget(self._separator())
        side.addWidget(self._section_label('Camadas'))
        h_add_layer = QHBoxLayout()
        self.spin_add_layer_size = QSpinBox(); self.spin_add_layer_size.setMinimum(1); self.spin_add_layer_size.setValue(2)
        self.spin_add_layer_pos = QSpinBox(); self.spin_add_layer_pos.setMinimum(1)
        h_add_layer.addWidget(QLabel('Tamanho'))
        h_add_layer.addWidget(self.spin_add_layer_size)
        h_add_layer.addWidget(QLabel('Posição'))
        h_add_layer.addWidget(self.spin_add_layer_pos)
        side.addLayout(h_add_layer)
        btn_add_layer = QPushButton('Adicionar Camada')
        btn_add_layer.clicked.connect(self._on_add_layer)
        side.addWidget(btn_add_layer)

        h_remove_layer = QHBoxLayout()
        self.spin_remove_layer = QSpinBox(); self.spin_remove_layer.setMinimum(1)
        h_remove_layer.addWidget(QLabel('Índice'))
        h_remove_layer.addWidget(self.spin_remove_layer)
        side.addLayout(h_remove_layer)
        btn_remove_layer = QPushButton('Remover Camada')
        btn_remove_layer.clicked.connect(self._on_remove_layer)
        side.addWidget(btn_remove_layer)

        side.addWidget(self._separator())
        side.addWidget(self._section_label('Entrada'))
        h_input = QHBoxLayout()
        self.edit_inputs = QLineEdit()
        self.edit_inputs.setPlaceholderText('Ex: 6, 1')
        h_input.addWidget(self.edit_inputs)
        btn_eval = QPushButton('Calcular')
        btn_eval.clicked.connect(self._on_evaluate)
        h_input.addWidget(btn_eval)
        side.addLayout(h_input)

        side.addWidget(self._separator())
        side.addWidget(self._section_label('Treino'))
        h_lr = QHBoxLayout()
        h_lr.addWidget(QLabel('LR'))
        self.spin_lr = QDoubleSpinBox()
        self.spin_lr.setDecimals(4)
        self.spin_lr.setSingleStep(0.001)
        self.spin_lr.setRange(0.0001, 1.0)
        self.spin_lr.setValue(LEARNING_RATE)
        h_lr.addWidget(self.spin_lr)
        h_lr.addWidget(QLabel('Passos'))
        self.spin_steps = QSpinBox()
        self.spin_steps.setRange(1, 1000000)
        self.spin_steps.setValue(5000)
        h_lr.addWidget(self.spin_steps)
        side.addLayout(h_lr)

        h_play = QHBoxLayout()
        self.btn_play = QPushButton('▶')
        self.btn_pause = QPushButton('⏸')
        self.btn_reset = QPushButton('Reset')
        for b in (self.btn_play, self.btn_pause, self.btn_reset):
            h_play.addWidget(b)
        self.btn_play.clicked.connect(self._on_play)
        self.btn_pause.clicked.connect(self._on_pause)
        self.btn_reset.clicked.connect(self._on_reset)
        side.addLayout(h_play)

        self.label_status = QLabel('Pronto')
        self.label_status.setWordWrap(True)
        side.addWidget(self.label_status)
        self.cost_chart = CostChartWidget()
        side.addWidget(self.cost_chart)
        side.addStretch(1)
        self.setCentralWidget(root)

    def _section_label(self, text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet('font-weight: bold; margin-top:8px;')
        return lbl

    def _separator(self) -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setStyleSheet('color:#999;')
        return line

    def _cost(self) -> float:
        return compute_cost(self.network, self.x, self.y, mse, len(self.x))

    def _refresh(self):
        self.scene.build(self.network)
        if self.x:
            self.scene.update_output_values(self.network.compute_out(self.x[0]))
        self.label_status.setText(
            f"Camadas: {self.network.layer_sizes} passos={self._steps_done} custo={self._cost():.6f}"
        )

    def _reset_training(self):
        self._steps_done = 0
        self._cost_history = []
        self.cost_chart.set_history(self._cost_history)
        self._refresh()

    def _new_network(self, layer_sizes: List[int]):
        self._on_pause()
        output = DATASETS[self.combo_dataset.currentText()]['activation']
        self.network = Network(layer_sizes, self.combo_hidden.currentText(), output,
                               shared=self.check_shared.isChecked())
        self._reset_training()

    def _load_dataset(self, name: str):
        self.x, self.y = DATASETS[name]['samples']()
        self._new_network([len(self.x[0]), 1])

    # Event handlers
    def _on_change_dataset(self, name: str):
        self._load_dataset(name)

    def _on_change_activation(self, *args):
        if self.network is not None:
            self._new_network(self.network.layer_sizes)

    def _on_add_layer(self):
        try:
            self._on_pause()
            add_layer(self.network, self.spin_add_layer_size.value(), self.spin_add_layer_pos.value())
            self._reset_training()
        except Exception as e:
            QMessageBox.warning(self, 'Erro', str(e))

    def _on_remove_layer(self):
        try:
            self._on_pause()
            remove_layer(self.network, self.spin_remove_layer.value())
            self._reset_training()
        except Exception as e:
            QMessageBox.warning(self, 'Erro', str(e))

    def _parse_inputs_text(self) -> List[float]:
        txt = self.edit_inputs.text().strip()
        parts = [p.strip() for p in txt.replace(';', ',').split(',') if p.strip()]
        vals = []
        for p in parts:
            try:
                vals.append(float(p))
            except ValueError:
                raise ValueError(f"valor inválido: {p}")
        if len(vals) != self.network.n_inputs:
            raise ValueError(f"esperado {self.network.n_inputs} valores, recebido {len(vals)}")
        return vals

    def _on_evaluate(self):
        try:
            outputs = self.network.compute_out(self._parse_inputs_text())
        except Exception as e:
            QMessageBox.warning(self, 'Erro', str(e))
            return
        self.scene.update_output_values(outputs)
        self.label_status.setText('Saída: ' + ', '.join(f'{v:.4f}' for v in outputs))

    def _on_play(self):
        if self._play_timer.isActive():
            return
        self._steps_target = self._steps_done + self.spin_steps.value()
        self._play_timer.start(0)
        self.label_status.setText('Treinando...')

    def _on_play_tick(self):
        lr = float(self.spin_lr.value())
        n = min(TRAIN_CHUNK, self._steps_target - self._steps_done)
        for _ in range(n):
            train_network(self.network, mse, self.x, self.y, len(self.x), lr)
        self._steps_done += n
        self._cost_history.append(self._cost())
        self.cost_chart.set_history(self._cost_history[-200:])
        if self._steps_done >= self._steps_target:
            self._play_timer.stop()
            self._refresh()
        else:
            self.label_status.setText(f'Treinando... passo {self._steps_done} custo={self._cost_history[-1]:.6f}')

    def _on_pause(self):
        if self._play_timer.isActive():
            self._play_timer.stop()
            self._refresh()

    def _on_reset(self):
        self._new_network(self.network.layer_sizes)
        self.label_status.setText('Reset')


def launch_qt_viewer(dataset_name: str = 'classificacao'):
    import sys
    app = QApplication(sys.argv)
    win = NetworkViewerWindow(dataset_name)
    win.resize(1200, 700)
    win.show()
    return app.exec()


if __name__ == '__main__':
    raise SystemExit(launch_qt_viewer())
