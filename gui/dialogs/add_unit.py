# gui/dialogs/add_unit.py
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QLocale, QObject
from PySide6.QtGui import QDoubleValidator
from PySide6.QtWidgets import (
    QComboBox, QDialog, QDialogButtonBox, QFormLayout, QLineEdit, QMessageBox, QVBoxLayout,
)

from core.expression import is_unit_symbol
from core.settings import CustomUnit

log = logging.getLogger(__name__)

_FAMILIES = ["", "length", "temperature"]


class AddUnitDialog(QDialog):
    """
    Collects symbol / factor / offset / family for a new or overridden unit.
    base = (value + offset) * factor
    """

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.setWindowTitle("Add Unit")

        root = QVBoxLayout(self)
        form = QFormLayout()

        validator = QDoubleValidator(self)
        validator.setLocale(QLocale.c())
        validator.setNotation(QDoubleValidator.StandardNotation)

        self.symbol_edit = QLineEdit()
        self.factor_edit = QLineEdit("1.0")
        self.factor_edit.setValidator(validator)
        self.offset_edit = QLineEdit("0.0")
        self.offset_edit.setValidator(validator)
        self.family_cb = QComboBox()
        self.family_cb.setEditable(True)
        self.family_cb.addItems(_FAMILIES)

        form.addRow("Symbol:", self.symbol_edit)
        form.addRow("Factor (to base):", self.factor_edit)
        form.addRow("Offset:", self.offset_edit)
        form.addRow("Family:", self.family_cb)
        root.addLayout(form)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self._on_ok)
        buttons.rejected.connect(self.reject)
        root.addWidget(buttons)

        self._unit: CustomUnit | None = None

    def unit(self) -> CustomUnit | None:
        return self._unit

    def _on_ok(self):
        symbol = self.symbol_edit.text().strip()
        if not is_unit_symbol(symbol):
            QMessageBox.warning(self, "Add Unit", "Symbol must be letters only (e.g. \"stone\").")
            return
        try:
            factor = float(self.factor_edit.text())
            offset = float(self.offset_edit.text() or 0.0)
        except ValueError:
            QMessageBox.warning(self, "Add Unit", "Factor and offset must be numbers.")
            return
        if factor == 0.0:
            QMessageBox.warning(self, "Add Unit", "Factor must be non-zero.")
            return

        family = self.family_cb.currentText().strip() or None
        self._unit = CustomUnit(symbol, factor, offset, family)
        log.debug("AddUnitDialog accepted %s", self._unit)
        self.accept()
