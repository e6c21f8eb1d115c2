# gui/widgets/units_table.py
from PySide6.QtWidgets import QWidget, QGroupBox, QVBoxLayout, QTableWidget, QTableWidgetItem, \
    QSizePolicy, QHeaderView, QAbstractItemView
from PySide6.QtCore import Qt

from core.converter import Converter

class UnitsTable(QWidget):
    """Read-only view of the converter's registry."""

    def __init__(self, converter: Converter, parent=None):
        super().__init__(parent)
        self.converter = converter

        self.group = QGroupBox("Registered Units")
        vbox = QVBoxLayout(self.group)

        self.table = QTableWidget(0, 4)
        self.table.setHorizontalHeaderLabels(["Symbol", "Factor", "Offset", "Family"])
        self.table.verticalHeader().setVisible(False)
        self.table.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.verticalHeader().setSectionResizeMode(QHeaderView.Fixed)
        self.table.verticalHeader().setDefaultSectionSize(28)
        self.table.setAlternatingRowColors(True)
        self.table.setWordWrap(False)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        vbox.addWidget(self.table)

        lay = QVBoxLayout(self)
        lay.addWidget(self.group)

        self.refresh()

    # ---- public API ----
    def refresh(self):
        df = self.converter.units_table()
        self.table.setRowCount(len(df))
        for r, row in enumerate(df.itertuples(index=False)):
            self.table.setItem(r, 0, QTableWidgetItem(row.Symbol))
            self.table.setItem(r, 1, self._num(row.Factor))
            self.table.setItem(r, 2, self._num(row.Offset))
            self.table.setItem(r, 3, QTableWidgetItem(row.Family))

    # ---- helpers ----
    @staticmethod
    def _num(value, nd=6):
        it = QTableWidgetItem(f"{value:.{nd}g}")
        it.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
        return it
