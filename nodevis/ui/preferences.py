from dataclasses import replace

from PyQt6.QtWidgets import (QDialog, QVBoxLayout, QHBoxLayout, QFormLayout, QLabel,
                             QComboBox, QPushButton, QDoubleSpinBox)
from PyQt6.QtCore import pyqtSignal

# (field, label, maximum)
WEIGHT_FIELDS = [
    ("cohesion_weight", "Cohesion", 10.0),
    ("outward_weight", "Outward pressure", 50.0),
    ("repulsion_weight", "Repulsion", 100.0),
    ("repulsion_distance", "Repulsion distance", 5.0),
    ("reorder_weight", "Reorder", 10.0),
    ("neighbor_cohesion_weight", "Neighbor cohesion", 10.0),
    ("cohesion_distance", "Neighbor distance", 5.0),
    ("center_correction_weight", "Center correction", 10.0),
]


class LayoutPreferencesDialog(QDialog):
    settings_applied = pyqtSignal(object, str) # LayoutConfig, theme

    def __init__(self, config, parent=None, current_theme="Dark"):
        super().__init__(parent)
        self.config = config
        self.setWindowTitle("Preferences")
        self.resize(320, 360)

        self.layout = QVBoxLayout(self)

        # Force weights
        form = QFormLayout()
        self.spin_boxes = {}
        for field, label, maximum in WEIGHT_FIELDS:
            box = QDoubleSpinBox()
            box.setDecimals(2)
            box.setSingleStep(0.1)
            box.setRange(-maximum, maximum)
            box.setValue(getattr(config, field))
            form.addRow(QLabel(label), box)
            self.spin_boxes[field] = box
        self.layout.addLayout(form)

        # Theme
        theme_layout = QHBoxLayout()
        theme_layout.addWidget(QLabel("Theme"))
        self.theme_combo = QComboBox()
        self.theme_combo.addItems(["Dark", "Light"])
        self.theme_combo.setCurrentIndex(0 if current_theme == "Dark" else 1)
        theme_layout.addWidget(self.theme_combo)
        self.layout.addLayout(theme_layout)

        # Buttons
        btn_layout = QHBoxLayout()
        self.btn_defaults = QPushButton("Defaults")
        self.btn_defaults.clicked.connect(self.on_defaults)
        self.btn_save = QPushButton("Apply")
        self.btn_save.clicked.connect(self.on_save)
        self.btn_cancel = QPushButton("Cancel")
        self.btn_cancel.clicked.connect(self.close)

        btn_layout.addWidget(self.btn_defaults)
        btn_layout.addStretch()
        btn_layout.addWidget(self.btn_cancel)
        btn_layout.addWidget(self.btn_save)
        self.layout.addLayout(btn_layout)

        # Style
        self.setStyleSheet("""
            QDialog { background-color: #2d2d2d; color: white; }
            QLabel { color: white; }
            QComboBox, QDoubleSpinBox { background-color: #3e3e3e; color: white; padding: 5px; border: 1px solid #555; }
            QPushButton { background-color: #0d47a1; color: white; padding: 5px 15px; border: none; }
            QPushButton:hover { background-color: #1565c0; }
        """)

    def on_defaults(self):
        defaults = type(self.config)()
        for field, box in self.spin_boxes.items():
            box.setValue(getattr(defaults, field))

    def on_save(self):
        values = {field: box.value() for field, box in self.spin_boxes.items()}
        self.settings_applied.emit(replace(self.config, **values), self.theme_combo.currentText())
        self.accept()
