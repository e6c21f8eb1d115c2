# gui/main_window.py

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QStatusBar,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from core.converter import Converter
from core.errors import ConversionError
from services.persistence import ConfigError, ConfigManager

from gui.app_bus import get_app_bus
from gui.dialogs.add_unit import AddUnitDialog
from gui.widgets.units_table import UnitsTable

log = logging.getLogger(__name__)


class MainWindow(QMainWindow):

    def __init__(self, config: Optional[ConfigManager] = None) -> None:

        super().__init__()

        self.setWindowTitle("luniconvert")

        # ---- Core systems ----
        self.bus = get_app_bus()
        self.config = config or ConfigManager()
        self.settings = self.config.load_settings()
        self.converter = Converter.from_settings(self.settings)

        # ---- Central UI ----
        central_widget = QWidget()
        main_layout = QVBoxLayout(central_widget)
        self.setCentralWidget(central_widget)

        # Expression input
        expr_group = QGroupBox("Convert")
        expr = QHBoxLayout(expr_group)

        self.input_edit = QLineEdit()
        self.input_edit.setPlaceholderText("e.g. 10km to mile")
        self.btn_convert = QPushButton("Convert")
        self.result_label = QLabel("")
        self.result_label.setMinimumWidth(160)

        expr.addWidget(self.input_edit, 1)
        expr.addWidget(self.btn_convert)
        expr.addWidget(self.result_label)
        main_layout.addWidget(expr_group)

        # Units table
        self.units_table = UnitsTable(self.converter, self)
        main_layout.addWidget(self.units_table)

        # Toolbar
        tb = QToolBar(movable=False)
        self.addToolBar(tb)
        act_add_unit = QAction("Add Unit...", self)
        tb.addAction(act_add_unit)

        sb = QStatusBar()
        self.setStatusBar(sb)

        # ---- Connections ----
        self.btn_convert.clicked.connect(self._on_convert_clicked)
        self.input_edit.returnPressed.connect(self._on_convert_clicked)
        act_add_unit.triggered.connect(self.open_add_unit)

        # Global events
        self.bus.conversionsChanged.connect(self.units_table.refresh)
        self.bus.conversionFinished.connect(self._on_conversion_finished)
        self.bus.conversionFailed.connect(self._on_conversion_failed)

    # ---------------- Event handlers ----------------

    def _on_convert_clicked(self) -> None:
        text = self.input_edit.text().strip()
        try:
            result = self.converter.convert(text)
        except ConversionError as e:
            log.info("Conversion of %r failed: %s", text, e)
            self.bus.conversionFailed.emit(text, str(e))
            return
        self.bus.conversionFinished.emit(text, result)

    def _on_conversion_finished(self, text: str, result: str) -> None:
        self.result_label.setText(result)
        self.statusBar().showMessage(f"{text} = {result}", 5000)

    def _on_conversion_failed(self, text: str, message: str) -> None:
        self.result_label.setText("")
        self.statusBar().showMessage(message, 5000)

    def open_add_unit(self) -> None:
        dlg = AddUnitDialog(self)
        if not dlg.exec():
            return
        unit = dlg.unit()
        if unit is None:
            return

        self.converter.add_conversion(unit.symbol, unit.factor, unit.offset, unit.family)
        self.settings.add_unit(unit)
        try:
            self.config.save_settings(self.settings)
        except (ConfigError, OSError) as e:
            log.exception("Saving settings failed")
            QMessageBox.warning(self, "Add Unit", f"Unit added for this session only:\n{e}")

        self.bus.conversionsChanged.emit()
        self.statusBar().showMessage(f"Unit '{unit.symbol}' registered.", 5000)
