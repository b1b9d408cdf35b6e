"""
Plotly-based 3D visualisation of units placed inside a parcel.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import plotly.graph_objects as go
import plotly.io as pio
from plotly.colors import qualitative

from parcelpack.core.utils_geometry import Placement
from parcelpack.models.parcel import PackedParcel

DEFAULT_COLOR_SEQUENCE = qualitative.Light24

_EDGES = [
    (0, 1),
    (1, 2),
    (2, 3),
    (3, 0),
    (4, 5),
    (5, 6),
    (6, 7),
    (7, 4),
    (0, 4),
    (1, 5),
    (2, 6),
    (3, 7),
]

# two triangles per face over the eight prism vertices
_FACE_I = [0, 0, 4, 4, 0, 0, 1, 1, 2, 2, 3, 3]
_FACE_J = [1, 2, 5, 6, 1, 5, 2, 6, 3, 7, 0, 4]
_FACE_K = [2, 3, 6, 7, 5, 4, 6, 5, 7, 6, 4, 7]


def _prism_vertices(
    x: float, y: float, z: float, dx: float, dy: float, dz: float
) -> Tuple[List[float], List[float], List[float]]:
    xs = [x, x + dx, x + dx, x, x, x + dx, x + dx, x]
    ys = [y, y, y + dy, y + dy, y, y, y + dy, y + dy]
    zs = [z, z, z, z, z + dz, z + dz, z + dz, z + dz]
    return xs, ys, zs


def _mesh_from_prism(placement: Placement, color: str, name: str) -> go.Mesh3d:
    dx, dy, dz = placement.dimensions
    xs, ys, zs = _prism_vertices(placement.x, placement.y, placement.z, dx, dy, dz)
    return go.Mesh3d(
        x=xs,
        y=ys,
        z=zs,
        i=_FACE_I,
        j=_FACE_J,
        k=_FACE_K,
        color=color,
        opacity=0.85,
        name=name,
        flatshading=True,
        lighting=dict(ambient=0.7, diffuse=0.9, specular=0.1),
        hovertext=f"{name} ({placement.orientation})",
        hoverinfo="text",
    )


def _edge_trace(
    xs: Sequence[float],
    ys: Sequence[float],
    zs: Sequence[float],
    color: str,
    name: str,
    width: float,
    showlegend: bool,
) -> go.Scatter3d:
    x_coords: List[float | None] = []
    y_coords: List[float | None] = []
    z_coords: List[float | None] = []
    for start, end in _EDGES:
        x_coords.extend([xs[start], xs[end], None])
        y_coords.extend([ys[start], ys[end], None])
        z_coords.extend([zs[start], zs[end], None])

    return go.Scatter3d(
        x=x_coords,
        y=y_coords,
        z=z_coords,
        mode="lines",
        line=dict(color=color, width=width),
        name=name,
        showlegend=showlegend,
        hoverinfo="skip",
    )


def _color_for_index(index: int) -> str:
    return DEFAULT_COLOR_SEQUENCE[index % len(DEFAULT_COLOR_SEQUENCE)]


def parcel_traces(parcel: PackedParcel) -> List[go.BaseTraceType]:
    """Container wireframe followed by one mesh and outline per placed unit."""
    length, width, height, _ = parcel.template.floats_mm()
    xs, ys, zs = _prism_vertices(0.0, 0.0, 0.0, length, width, height)
    traces: List[go.BaseTraceType] = [
        _edge_trace(xs, ys, zs, color="#2d3748", name=parcel.name, width=4, showlegend=True)
    ]

    colors: Dict[str, str] = {}
    for placement in parcel.placements:
        color = colors.setdefault(placement.item_id, _color_for_index(len(colors)))
        name = parcel.items[placement.item_id].name
        traces.append(_mesh_from_prism(placement, color=color, name=name))
        dx, dy, dz = placement.dimensions
        xs, ys, zs = _prism_vertices(placement.x, placement.y, placement.z, dx, dy, dz)
        traces.append(_edge_trace(xs, ys, zs, color="#000000", name=name, width=2.5, showlegend=False))
    return traces


def parcel_layout_figure(parcel: PackedParcel) -> go.Figure:
    fig = go.Figure()
    for trace in parcel_traces(parcel):
        fig.add_trace(trace)

    axis_style = dict(
        backgroundcolor="#f2f5fb",
        gridcolor="#cbd5e0",
        zerolinecolor="#a0aec0",
    )
    fig.update_layout(
        title=f"Units inside {parcel.name}",
        scene=dict(
            xaxis_title="Length (mm)",
            yaxis_title="Width (mm)",
            zaxis_title="Height (mm)",
            aspectmode="data",
            xaxis=axis_style,
            yaxis=axis_style,
            zaxis=axis_style,
        ),
        paper_bgcolor="#f7f9fc",
        plot_bgcolor="#f7f9fc",
        legend=dict(
            bgcolor="rgba(255,255,255,0.8)",
            bordercolor="#cbd5e0",
            borderwidth=1,
        ),
        margin=dict(l=0, r=0, t=40, b=0),
    )
    return fig


def save_figure_image(fig: go.Figure, output_path: str | Path, width: int = 900, height: int = 650) -> None:
    """
    Persist a figure to disk as a static PNG using Kaleido.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    pio.write_image(fig, str(output_path), format="png", width=width, height=height, scale=2)
