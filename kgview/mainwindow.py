# mainwindow.py
import logging

from PyQt5.QtWidgets import (
    QMainWindow, QStatusBar, QAction, QFileDialog,
    QMessageBox, QDockWidget, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QSpinBox, QLabel, QGroupBox, QShortcut, QLineEdit, QComboBox,
    QListWidget
)
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QKeySequence

from .engine import GraphEngine
from .graphwidget import GraphWidget
from .query import DIRECTIONS
from .sample import SAMPLE_SNAPSHOT

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, engine: GraphEngine = None):
        super().__init__()
        self.setWindowTitle("Knowledge Graph Viewer")

        self.engine = engine or GraphEngine()
        self.graphWidget = GraphWidget(self, self.engine)
        self.setCentralWidget(self.graphWidget)

        self.setStatusBar(QStatusBar(self))

        self.createActions()
        self.createMenuBar()
        self.createControlsDock()
        self.createShortcuts()

    def createActions(self):
        self.sampleAction = QAction("Load &Sample Graph", self, triggered=self.loadSample)
        self.saveAction = QAction("&Save Graph", self, triggered=self.saveGraph)
        self.loadAction = QAction("&Load Graph", self, triggered=self.loadGraph)

        self.graphInfoAction = QAction("&Graph Info", self, triggered=self.showGraphInfo)
        self.coreAction = QAction("&Core Nodes", self, triggered=self.showCoreNodes)
        self.componentsAction = QAction("C&onnected Components", self, triggered=self.showComponents)
        self.clearAction = QAction("C&lear Highlight", self, triggered=self.engine.clearHighlight)

        self.zoomInAction = QAction("Zoom &In", self, triggered=self.graphWidget.zoomIn)
        self.zoomOutAction = QAction("Zoom &Out", self, triggered=self.graphWidget.zoomOut)
        self.resetAction = QAction("&Reset Layout", self, triggered=self.graphWidget.resetView)
        self.toggleLabelsAction = QAction("&Toggle Edge Labels", self, triggered=self.graphWidget.toggleEdgeLabels)

    def createMenuBar(self):
        menuBar = self.menuBar()

        fileMenu = menuBar.addMenu("&File")
        fileMenu.addAction(self.sampleAction)
        fileMenu.addAction(self.loadAction)
        fileMenu.addAction(self.saveAction)

        queryMenu = menuBar.addMenu("&Query")
        queryMenu.addAction(self.coreAction)
        queryMenu.addAction(self.componentsAction)
        queryMenu.addAction(self.graphInfoAction)
        queryMenu.addSeparator()
        queryMenu.addAction(self.clearAction)

        viewMenu = menuBar.addMenu("&View")
        viewMenu.addAction(self.zoomInAction)
        viewMenu.addAction(self.zoomOutAction)
        viewMenu.addAction(self.resetAction)
        viewMenu.addAction(self.toggleLabelsAction)

    def createControlsDock(self):
        dock = QDockWidget("Controls", self)
        dock.setAllowedAreas(Qt.RightDockWidgetArea)

        mainControlsWidget = QWidget()
        mainLayout = QVBoxLayout(mainControlsWidget)
        mainLayout.setAlignment(Qt.AlignTop)

        searchGroup = QGroupBox("Search")
        searchLayout = QVBoxLayout()
        self.searchEdit = QLineEdit()
        self.searchEdit.setPlaceholderText("Node name...")
        self.typeCombo = QComboBox()
        self.relationEdit = QLineEdit()
        self.relationEdit.setPlaceholderText("Relation type...")
        btn_search = QPushButton("Find Nodes")
        btn_relations = QPushButton("Find Relations")
        searchLayout.addWidget(self.searchEdit)
        searchLayout.addWidget(self.typeCombo)
        searchLayout.addWidget(btn_search)
        searchLayout.addWidget(self.relationEdit)
        searchLayout.addWidget(btn_relations)
        searchGroup.setLayout(searchLayout)

        neighborGroup = QGroupBox("Neighbors")
        neighborLayout = QHBoxLayout()
        self.depthSpin = QSpinBox()
        self.depthSpin.setRange(0, 10)
        self.depthSpin.setValue(1)
        self.directionCombo = QComboBox()
        self.directionCombo.addItems(list(DIRECTIONS))
        self.directionCombo.setCurrentText("all")
        btn_neighbors = QPushButton("Expand Selected")
        neighborLayout.addWidget(QLabel("Depth:"))
        neighborLayout.addWidget(self.depthSpin)
        neighborLayout.addWidget(self.directionCombo)
        neighborLayout.addWidget(btn_neighbors)
        neighborGroup.setLayout(neighborLayout)

        pathGroup = QGroupBox("Paths")
        pathLayout = QVBoxLayout()
        self.pathFrom = QLineEdit()
        self.pathFrom.setPlaceholderText("From (id or name)")
        self.pathTo = QLineEdit()
        self.pathTo.setPlaceholderText("To (id or name)")
        btn_shortest = QPushButton("Shortest Path")
        btn_all = QPushButton("All Paths")
        pathLayout.addWidget(self.pathFrom)
        pathLayout.addWidget(self.pathTo)
        pathLayout.addWidget(btn_shortest)
        pathLayout.addWidget(btn_all)
        pathGroup.setLayout(pathLayout)

        self.resultsList = QListWidget()

        mainLayout.addWidget(searchGroup)
        mainLayout.addWidget(neighborGroup)
        mainLayout.addWidget(pathGroup)
        mainLayout.addSpacing(10)
        mainLayout.addWidget(QLabel("Results:"))
        mainLayout.addWidget(self.resultsList)

        dock.setWidget(mainControlsWidget)
        self.addDockWidget(Qt.RightDockWidgetArea, dock)

        btn_search.clicked.connect(self.searchNodes)
        self.searchEdit.returnPressed.connect(self.searchNodes)
        btn_relations.clicked.connect(self.searchRelations)
        btn_neighbors.clicked.connect(self.expandSelected)
        btn_shortest.clicked.connect(self.shortestPath)
        btn_all.clicked.connect(self.allPaths)

    def createShortcuts(self):
        QShortcut(QKeySequence("Ctrl+S"), self, self.saveAction.trigger)
        QShortcut(QKeySequence("Ctrl+O"), self, self.loadAction.trigger)
        QShortcut(QKeySequence("R"), self, self.resetAction.trigger)
        QShortcut(QKeySequence("T"), self, self.toggleLabelsAction.trigger)
        QShortcut(QKeySequence("I"), self, self.graphInfoAction.trigger)
        QShortcut(QKeySequence(Qt.Key_Escape), self, self.clearAction.trigger)
        QShortcut(QKeySequence(Qt.Key_Plus), self, self.zoomInAction.trigger)
        QShortcut(QKeySequence(Qt.Key_Equal), self, self.zoomInAction.trigger)
        QShortcut(QKeySequence(Qt.Key_Minus), self, self.zoomOutAction.trigger)

    # --------------------------
    # File
    # --------------------------
    def onGraphLoaded(self, source: str):
        logger.info("Viewer loaded %s: %s", source, self.engine.model.get_stats())
        self.typeCombo.clear()
        self.typeCombo.addItem("")
        self.typeCombo.addItems(sorted(self.engine.nodeTypeCounts()))
        self.resultsList.clear()
        self.statusBar().showMessage(f"Graph loaded from {source}", 5000)

    def loadSample(self):
        self.engine.load(SAMPLE_SNAPSHOT)
        self.onGraphLoaded("sample")

    def saveGraph(self):
        path, _ = QFileDialog.getSaveFileName(self, "Save Graph", "", "JSON Files (*.json)")
        if path:
            if self.engine.save_to_json(path):
                self.statusBar().showMessage(f"Graph saved to {path}", 5000)
            else:
                QMessageBox.warning(self, "Error", "Could not save the graph.")

    def loadGraph(self):
        path, _ = QFileDialog.getOpenFileName(self, "Load Graph", "", "JSON Files (*.json)")
        if path:
            if self.engine.load_from_json(path):
                self.onGraphLoaded(path)
            else:
                QMessageBox.warning(self, "Error", "Could not load the graph.")

    # --------------------------
    # Queries
    # --------------------------
    def _resolve(self, text: str):
        """Node id for an id or a case-insensitive exact name."""
        text = text.strip()
        if self.engine.model.hasNode(text):
            return text
        for n in self.engine.model.getNodes():
            if n.getName().lower() == text.lower():
                return n.getId()
        return None

    def _showResults(self, lines):
        self.resultsList.clear()
        self.resultsList.addItems(lines)

    def searchNodes(self):
        hits = self.engine.search(self.searchEdit.text(), self.typeCombo.currentText() or None)
        self._showResults([f"{n.getName()} [{n.getType()}]" for n in hits])
        self.statusBar().showMessage(f"{len(hits)} node(s) found", 4000)

    def searchRelations(self):
        grouped = self.engine.searchRelations(self.relationEdit.text())
        lines = []
        for label, edges in grouped.items():
            for e in edges:
                lines.append(f"{self.engine.model.nodeName(e.getSourceId())} -[{label}]-> "
                             f"{self.engine.model.nodeName(e.getTargetId())}")
        self._showResults(lines)

    def expandSelected(self):
        nodeId = self.engine.view.selectedNodeId
        if nodeId is None:
            self.statusBar().showMessage("Click a node first.", 3000)
            return
        h = self.engine.neighborsWithinDepth(nodeId, self.depthSpin.value(),
                                             self.directionCombo.currentText())
        self._showResults(sorted(self.engine.model.nodeName(n) for n in h.nodes))

    def _pathEnds(self):
        a, b = self._resolve(self.pathFrom.text()), self._resolve(self.pathTo.text())
        if a is None or b is None:
            self.statusBar().showMessage("Unknown node.", 3000)
            return None
        return a, b

    def shortestPath(self):
        ends = self._pathEnds()
        if ends is None:
            return
        result = self.engine.shortestPath(*ends)
        if result:
            self._showResults([self.engine.describePath(result.path, withRelations=True)])
        else:
            self._showResults(["No path found."])

    def allPaths(self):
        ends = self._pathEnds()
        if ends is None:
            return
        paths = self.engine.allPaths(*ends)
        self._showResults([self.engine.describePath(p) for p in paths] or ["No path found."])

    def showCoreNodes(self):
        ranked = self.engine.coreNodesByDegree()
        self._showResults([f"{r.name} ({r.degree})" for r in ranked])

    def showComponents(self):
        comps = self.engine.connectedComponents()
        self._showResults([", ".join(self.engine.model.nodeName(n) for n in c) for c in comps])

    def showGraphInfo(self):
        stats = self.engine.model.get_stats()
        self.statusBar().showMessage(
            f"Nodes: {stats['nodes']}, Edges: {stats['edges']}, "
            f"Types: {stats['node_types']}, Components: {stats['components']}",
            6000
        )
