from pathlib import Path

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QBrush, QColor, QIcon, QPainter, QPainterPath, QPen, QPixmap


def icon_search(size: int = 18, color: QColor = QColor(235, 235, 235)) -> QPixmap:
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)
    painter = QPainter(pm)
    painter.setRenderHint(QPainter.Antialiasing, True)

    pen = QPen(color)
    pen.setWidthF(max(1.5, size * 0.09))
    pen.setCapStyle(Qt.RoundCap)
    painter.setPen(pen)
    painter.setBrush(Qt.NoBrush)

    radius = size * 0.28
    center = QPointF(size * 0.44, size * 0.44)
    painter.drawEllipse(center, radius, radius)
    painter.drawLine(
        QPointF(center.x() + radius * 0.72, center.y() + radius * 0.72),
        QPointF(size * 0.84, size * 0.84),
    )
    painter.end()
    return pm


def icon_play(size: int = 18, color: QColor = QColor(235, 235, 235)) -> QPixmap:
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)
    painter = QPainter(pm)
    painter.setRenderHint(QPainter.Antialiasing, True)
    painter.setPen(Qt.NoPen)
    painter.setBrush(QBrush(color))

    pad = size * 0.25
    path = QPainterPath()
    path.moveTo(pad, pad)
    path.lineTo(size - pad, size / 2.0)
    path.lineTo(pad, size - pad)
    path.closeSubpath()
    painter.drawPath(path)
    painter.end()
    return pm


def get_app_icon() -> QIcon:
    """Window icon: the bundled .ico when shipped, otherwise a painted glyph."""
    icon_path = Path(__file__).parent.parent / "icons" / "icon.ico"
    if icon_path.exists():
        return QIcon(str(icon_path))
    return QIcon(icon_play(64))
