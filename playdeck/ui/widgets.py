from PySide6.QtCore import QAbstractListModel, QModelIndex, Qt, Signal
from PySide6.QtWidgets import QAbstractItemView, QListView

from ..track_index import DisplayRow

TRACK_LOCATOR_ROLE = Qt.UserRole + 1
TRACK_NUMBER_ROLE = Qt.UserRole + 2


class TrackRowModel(QAbstractListModel):
    def __init__(self, parent=None):
        super().__init__(parent)
        self._rows: list[DisplayRow] = []

    def rowCount(self, parent=QModelIndex()):
        if parent.isValid():
            return 0
        return len(self._rows)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        row = index.row()
        if row < 0 or row >= len(self._rows):
            return None
        item = self._rows[row]
        if role == Qt.DisplayRole:
            return item.text
        if role == Qt.ToolTipRole:
            return item.track.locator
        if role == TRACK_LOCATOR_ROLE:
            return item.track.locator
        if role == TRACK_NUMBER_ROLE:
            return item.number
        return None

    def flags(self, index):
        if not index.isValid():
            return Qt.NoItemFlags
        return Qt.ItemIsEnabled | Qt.ItemIsSelectable

    def set_rows(self, rows: list[DisplayRow]):
        self.beginResetModel()
        self._rows = list(rows)
        self.endResetModel()


class TrackListView(QListView):
    activated_row = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setSelectionMode(QAbstractItemView.SingleSelection)
        self.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.setUniformItemSizes(True)
        self.setVerticalScrollMode(QAbstractItemView.ScrollPerPixel)
        self.doubleClicked.connect(self._emit_row)

    def _emit_row(self, index):
        if not index or not index.isValid():
            return
        self.activated_row.emit(str(index.data(Qt.DisplayRole) or ""))

    def keyPressEvent(self, event):
        if event.key() in (Qt.Key_Enter, Qt.Key_Return):
            self._emit_row(self.currentIndex())
        else:
            super().keyPressEvent(event)
