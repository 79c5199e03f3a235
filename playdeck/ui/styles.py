WINDOW_STYLE = """
QWidget#BrowserPanel {
  background: rgba(20, 20, 20, 0.98);
}

QLabel {
  color: rgba(255,255,255,175);
  font-family: "Segoe UI";
  font-size: 13px;
}

QLabel#NowPlaying {
  color: rgba(255,255,255,255);
  font-weight: 600;
  font-size: 14px;
}

QLabel#StatusLine {
  color: rgba(255,255,255,110);
  font-size: 11px;
}

QComboBox, QLineEdit {
  background: rgba(255,255,255,10);
  border: 1px solid rgba(255,255,255,25);
  border-radius: 8px;
  color: rgba(255,255,255,230);
  font-family: "Segoe UI";
  font-size: 13px;
  padding: 6px 8px;
}

QComboBox:focus, QLineEdit:focus {
  border: 1px solid rgba(255,255,255,60);
}

QComboBox QAbstractItemView {
  background-color: rgba(25, 25, 25, 0.98);
  color: rgba(255,255,255,230);
  selection-background-color: rgba(255,255,255,25);
  border: 1px solid rgba(255, 255, 255, 0.1);
}

QListView {
  background: transparent;
  border: none;
  color: rgba(255,255,255,255);
  font-family: "Segoe UI";
  font-size: 14px;
  outline: none;
  padding-right: 4px;
}

QListView::item {
  background: rgba(255,255,255,6);
  border-radius: 8px;
  margin-bottom: 2px;
  padding: 4px 6px;
}

QListView::item:selected {
  background: rgba(255,255,255,20);
  border: 1px solid rgba(255,255,255,30);
}

QListView::item:hover {
  background: rgba(255,255,255,12);
}

QScrollBar:vertical {
  background: transparent;
  width: 8px;
  margin: 0px;
  border-radius: 4px;
}

QScrollBar::handle:vertical {
  background: rgba(255, 255, 255, 40);
  min-height: 30px;
  border-radius: 4px;
  margin: 0px 2px;
}

QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {
  background: none;
  height: 0px;
}

QScrollBar::add-page:vertical, QScrollBar::sub-page:vertical {
  background: none;
}
"""
