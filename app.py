# app.py
import json
import logging

import streamlit as st
import plotly.graph_objects as go

from kgview import GraphEngine
from kgview.sample import SAMPLE_SNAPSHOT
from kgview.query import DIRECTIONS
from kgview.viewport import edge_geometry

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title="Knowledge Graph Viewer (Web)", layout="wide")

# Session state
if 'engine' not in st.session_state:
    e = GraphEngine()
    e.load(SAMPLE_SNAPSHOT)
    st.session_state.engine = e

engine: GraphEngine = st.session_state.engine
model = engine.model


def node_options():
    return {f"{n.getName()} ({n.getId()})": n.getId() for n in model.getNodes()}


# UI
col_btns, col_plot = st.columns([1, 4], gap="large")

with col_btns:
    st.markdown("### Graph")
    uploaded = st.file_uploader("Load JSON snapshot", type=["json"])
    if uploaded is not None and st.button("Load"):
        try:
            data = json.loads(uploaded.getvalue().decode("utf-8"))
        except ValueError as err:
            st.error(f"Could not parse the file: {err}")
        else:
            if isinstance(data, dict):
                engine.load(data)
            else:
                st.error("Top level must be an object with 'nodes' and 'edges'.")
    if st.button("Load Sample"):
        engine.load(SAMPLE_SNAPSHOT)
    st.download_button("Download JSON", json.dumps(model.to_snapshot(), indent=2),
                       file_name="graph.json", mime="application/json")
    st.divider()

    options = node_options()
    st.markdown("### Search")
    query = st.text_input("Node name")
    types = [""] + sorted(engine.nodeTypeCounts())
    node_type = st.selectbox("Type", types)
    if st.button("Find Nodes"):
        hits = engine.search(query, node_type or None)
        st.caption(f"{len(hits)} node(s) found")
    relation = st.text_input("Relation type")
    if st.button("Find Relations"):
        grouped = engine.searchRelations(relation)
        for label, edges in grouped.items():
            st.caption(f"{label}: {len(edges)}")
    st.divider()

    if options:
        st.markdown("### Neighbors")
        center_label = st.selectbox("Node", list(options), key="center")
        depth = st.slider("Depth", 0, 5, 1)
        direction = st.selectbox("Direction", list(DIRECTIONS), index=list(DIRECTIONS).index("all"))
        c1, c2 = st.columns(2)
        if c1.button("Expand"):
            engine.neighborsWithinDepth(options[center_label], depth, direction)
        if c2.button("Re-center"):
            engine.recenterOn(options[center_label])
        st.divider()

        st.markdown("### Paths")
        a_label = st.selectbox("From", list(options), key="path_a")
        b_label = st.selectbox("To", list(options), key="path_b")
        c1, c2 = st.columns(2)
        if c1.button("Shortest"):
            result = engine.shortestPath(options[a_label], options[b_label])
            if result:
                st.success(engine.describePath(result.path, withRelations=True))
            else:
                st.warning("No path found.")
        if c2.button("All Paths"):
            paths = engine.allPaths(options[a_label], options[b_label])
            if not paths:
                st.warning("No path found.")
            for p in paths:
                st.caption(engine.describePath(p))
        st.divider()

    st.markdown("### Structure")
    c1, c2 = st.columns(2)
    if c1.button("Core Nodes"):
        for r in engine.coreNodesByDegree():
            st.caption(f"{r.name}: {r.degree}")
    if c2.button("Components"):
        for comp in engine.connectedComponents():
            st.caption(", ".join(model.nodeName(n) for n in comp))
    if st.button("Clear Highlight"):
        engine.clearHighlight()
    # Info
    stats = model.get_stats()
    st.markdown(
        f"Nodes: {stats['nodes']}  \n"
        f"Edges: {stats['edges']}  \n"
        f"Types: {stats['node_types']}  \n"
        f"Components: {stats['components']}"
    )

# --------- Build Plotly figure ----------
with col_plot:
    fig = go.Figure()
    h = engine.highlight
    radius = engine.config.layout.node_radius
    dimmed = not h.isEmpty()

    # Draw edges (trimmed, arrowheads via annotations)
    for e in model.getEdges():
        g = edge_geometry(e, model, radius, engine.config.view)
        if g is None:
            continue
        hot = h.hasEdge(e.getSourceId(), e.getTargetId())
        color = '#F97316' if hot else ('rgba(148,163,184,0.25)' if dimmed else 'rgba(148,163,184,1)')
        fig.add_annotation(
            x=g.end.x(), y=g.end.y(), ax=g.start.x(), ay=g.start.y(),
            xref='x', yref='y', axref='x', ayref='y',
            showarrow=True, arrowhead=2, arrowsize=1, arrowwidth=2.5 if hot else 1.2,
            arrowcolor=color, text=''
        )
        if e.getType():
            fig.add_annotation(x=g.label.x(), y=g.label.y(), text=e.getType(),
                               showarrow=False, font=dict(size=9, color='#64748B'))

    # Draw nodes
    vx = []; vy = []; txt = []; hover = []; marker_color = []; marker_line = []; opacity = []
    for n in model.getNodes():
        p = model.getPosition(n.getId())
        if p is None:
            continue
        vx.append(p.x()); vy.append(p.y())
        txt.append(n.getName())
        hover.append(f"{n.getName()}<br>{n.getType()}<br>{n.getDescription() or ''}")
        hot = n.getId() in h.nodes
        marker_color.append(engine.nodeColor(n.getType()))
        marker_line.append('#0F172A' if hot else '#FFFFFF')
        opacity.append(0.25 if dimmed and not hot else 1.0)

    fig.add_trace(go.Scatter(
        x=vx, y=vy, mode='markers+text',
        text=txt, textposition='bottom center',
        hovertext=hover, hoverinfo='text',
        marker=dict(
            size=2 * radius, color=marker_color, opacity=opacity,
            line=dict(width=2, color=marker_line),
        ),
        showlegend=False
    ))

    vp = model.getViewport()
    fig.update_xaxes(range=[vp.left(), vp.right()])
    # Layout space is y-down
    fig.update_yaxes(range=[vp.bottom(), vp.top()], scaleanchor="x", scaleratio=1)
    fig.update_layout(
        margin=dict(l=20, r=20, t=10, b=10),
        xaxis=dict(visible=False), yaxis=dict(visible=False),
        dragmode='pan', height=750
    )
    st.plotly_chart(fig, use_container_width=True)
