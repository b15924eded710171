# main.py

from PyQt5.QtWidgets import QApplication
from kgview.mainwindow import MainWindow
import logging
import sys


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    window = MainWindow()
    window.resize(1200, 900)
    window.show()
    if len(sys.argv) > 1:
        if not window.engine.load_from_json(sys.argv[1]):
            window.loadSample()
        else:
            window.onGraphLoaded(sys.argv[1])
    else:
        window.loadSample()
    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
