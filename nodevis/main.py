import logging
import os
import sys

from PyQt6.QtWidgets import (QApplication, QMainWindow, QFileDialog, QMessageBox, QVBoxLayout,
                             QWidget, QLabel, QSplitter, QTextEdit)
from PyQt6.QtGui import QAction, QPalette, QColor
from PyQt6.QtCore import Qt

from nodevis.controller import Controller
from nodevis.model import load_graph_file, new_model
from nodevis.ui.graph_widget import GraphWidget
from nodevis.ui.preferences import LayoutPreferencesDialog

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "C: create node  Shift+C: create linked node  Right click: delete  "
    "F: focus  A: all nodes  Space: reset  Wheel/+/-: zoom  Middle drag: pan"
)


class MainWindow(QMainWindow):
    def __init__(self, model=None):
        super().__init__()
        self.setWindowTitle("NodeVis - Graph Layout")
        self.resize(1200, 800)

        # State
        self.current_theme = "Dark"

        # Setup Logic
        self.controller = Controller(model or new_model())

        # Setup UI
        self.init_ui()
        self.setup_theme(self.current_theme)

    def init_ui(self):
        # Central Widget
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)

        # Main Layout
        self.main_layout = QVBoxLayout(self.central_widget)
        self.main_layout.setContentsMargins(0, 0, 0, 0)

        # Info Bar
        self.info_label = QLabel(HELP_TEXT)
        self.main_layout.addWidget(self.info_label)

        # Splitter
        self.splitter = QSplitter(Qt.Orientation.Horizontal)
        self.main_layout.addWidget(self.splitter)

        # Left: node details
        self.details_panel = QTextEdit()
        self.details_panel.setReadOnly(True)
        self.details_panel.setText("Select a node to view details.")
        self.splitter.addWidget(self.details_panel)

        # Right: graph
        self.graph_widget = GraphWidget(self.controller)
        self.graph_widget.nodeClicked.connect(self.on_node_clicked)
        self.graph_widget.graphChanged.connect(self.on_graph_changed)
        self.graph_widget.quitRequested.connect(self.close)
        self.splitter.addWidget(self.graph_widget)

        # Set Splitter Ratios (25% / 75%)
        self.splitter.setStretchFactor(0, 25)
        self.splitter.setStretchFactor(1, 75)

        # Menu
        self.create_menu()

    def create_menu(self):
        menu = self.menuBar()
        menu.clear()

        file_menu = menu.addMenu("&File")

        open_action = QAction("Open graph...", self)
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.open_file_dialog)
        file_menu.addAction(open_action)

        exit_action = QAction("Exit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = menu.addMenu("&Edit")
        pref_action = QAction("Preferences...", self)
        pref_action.triggered.connect(self.open_preferences)
        edit_menu.addAction(pref_action)

        view_menu = menu.addMenu("&View")
        reset_action = QAction("Reset view", self)
        reset_action.triggered.connect(self.reset_view)
        view_menu.addAction(reset_action)

        full_action = QAction("Show full graph", self)
        full_action.triggered.connect(self.show_full_graph)
        view_menu.addAction(full_action)

    def open_preferences(self):
        dlg = LayoutPreferencesDialog(self.controller.config, self, self.current_theme)
        dlg.settings_applied.connect(self.apply_preferences)
        dlg.exec()

    def apply_preferences(self, config, theme):
        self.controller.view_model.config = config
        logger.info("Layout settings updated")

        if theme != self.current_theme:
            self.setup_theme(theme)
            self.current_theme = theme

    def setup_theme(self, theme_name):
        app = QApplication.instance()
        app.setStyle("Fusion")

        palette = QPalette()
        if theme_name == "Dark":
            palette.setColor(QPalette.ColorRole.Window, QColor(53, 53, 53))
            palette.setColor(QPalette.ColorRole.WindowText, Qt.GlobalColor.white)
            palette.setColor(QPalette.ColorRole.Base, QColor(25, 25, 25))
            palette.setColor(QPalette.ColorRole.Text, Qt.GlobalColor.white)
            palette.setColor(QPalette.ColorRole.Button, QColor(53, 53, 53))
            palette.setColor(QPalette.ColorRole.ButtonText, Qt.GlobalColor.white)
            palette.setColor(QPalette.ColorRole.Highlight, QColor(42, 130, 218))
            palette.setColor(QPalette.ColorRole.HighlightedText, Qt.GlobalColor.black)
            sheet = "QTextEdit { background-color: #1e1e1e; color: #d4d4d4; border: none; padding: 10px; }"
            bg, fg = "#252526", "#ccc"
            canvas = QColor(26, 26, 26)
        else:
            palette.setColor(QPalette.ColorRole.Window, QColor(240, 240, 240))
            palette.setColor(QPalette.ColorRole.WindowText, Qt.GlobalColor.black)
            palette.setColor(QPalette.ColorRole.Base, Qt.GlobalColor.white)
            palette.setColor(QPalette.ColorRole.Text, Qt.GlobalColor.black)
            palette.setColor(QPalette.ColorRole.Button, QColor(240, 240, 240))
            palette.setColor(QPalette.ColorRole.ButtonText, Qt.GlobalColor.black)
            palette.setColor(QPalette.ColorRole.Highlight, QColor(76, 163, 224))
            palette.setColor(QPalette.ColorRole.HighlightedText, Qt.GlobalColor.white)
            sheet = "QTextEdit { background-color: #ffffff; color: #000000; border: none; padding: 10px; }"
            bg, fg = "#e0e0e0", "#333"
            canvas = QColor(90, 90, 90)

        app.setPalette(palette)
        self.details_panel.setStyleSheet(sheet)
        self.info_label.setStyleSheet(f"padding: 5px; background-color: {bg}; color: {fg};")
        self.graph_widget.set_bg_color(canvas)

    def _node_name(self, node_id):
        attrs = self.controller.model.node(node_id)
        return attrs["label"] if attrs else str(node_id)

    def on_node_clicked(self, node_id):
        """Shows the node's callers and callees."""
        model = self.controller.model
        if model.node(node_id) is None:
            self.details_panel.setText("Select a node to view details.")
            return

        text = f"<h1>Node: {self._node_name(node_id)}</h1><br>"

        text += "<h3>Incoming</h3><ul>"
        callers = model.callers(node_id)
        if callers:
            for caller in callers:
                text += f"<li>{self._node_name(caller)}</li>"
        else:
            text += "<li><i>source</i></li>"
        text += "</ul><br>"

        text += "<h3>Outgoing</h3><ul>"
        callees = model.callees(node_id)
        if callees:
            for callee in callees:
                text += f"<li>{self._node_name(callee)}</li>"
        else:
            text += "<li><i>sink</i></li>"
        text += "</ul>"

        pos = self.controller.view_model.position(node_id)
        if pos is not None:
            text += f"<p>Position: ({pos.x:.2f}, {pos.y:.2f})</p>"

        self.details_panel.setHtml(text)

    def on_graph_changed(self):
        graph = self.controller.model.graph
        shown = len(self.controller.view_model.projection)
        focus = self.controller.focus
        scope = f"focus on {self._node_name(focus)}" if focus is not None else "full graph"
        self.info_label.setText(
            f"{graph.number_of_nodes()} nodes, {graph.number_of_edges()} edges, "
            f"{shown} shown ({scope})"
        )
        if self.controller.selected is not None:
            self.on_node_clicked(self.controller.selected)

    def open_file_dialog(self):
        fname, _ = QFileDialog.getOpenFileName(
            self, "Open graph", "",
            "Graphs (*.graphml *.gml *.edgelist *.txt);;All Files (*)")
        if fname:
            self.load_graph(fname)

    def load_graph(self, path):
        self.info_label.setText(f"Loading {os.path.basename(path)}...")
        QApplication.processEvents() # Force update

        try:
            model = load_graph_file(path)
        except Exception as e:
            logger.exception("Failed to load %s", path)
            QMessageBox.critical(self, "Error", f"Failed to open graph:\n{e}")
            self.info_label.setText("Error")
            return

        self.controller.load_model(model)
        self.details_panel.setText("Select a node to view details.")
        self.on_graph_changed()

    def reset_view(self):
        self.controller.reset_view()
        self.on_graph_changed()

    def show_full_graph(self):
        self.controller.show_full_graph()
        self.on_graph_changed()


def main(argv=None):
    logging.basicConfig(level=logging.INFO)
    argv = sys.argv if argv is None else argv

    app = QApplication(argv)
    window = MainWindow()
    if len(argv) > 1:
        window.load_graph(argv[1])
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
