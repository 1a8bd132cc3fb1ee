"""
Space-time diagrams of a firing squad run.

Rows are generations, columns are interior cells, colored by each state's
background color.
"""

from pathlib import Path
from typing import Iterable, Union

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.colors as mcolors

from .state import StateCatalog


def line_colors(catalog: StateCatalog) -> np.ndarray:
    """
    RGB color per state index.

    Colors matplotlib cannot parse fall back to the tab20 colormap.

    Returns:
        Array [K, 3] as uint8
    """
    fallback = plt.get_cmap("tab20")
    colors = np.zeros((len(catalog), 3), dtype=np.uint8)
    for i, state in enumerate(catalog):
        try:
            rgb = mcolors.to_rgb(state.bg_color)
        except ValueError:
            rgb = fallback(i % fallback.N)[:3]
        colors[i] = (np.asarray(rgb) * 255).astype(np.uint8)
    return colors


def space_time_image(history: Iterable[list[str]], catalog: StateCatalog) -> np.ndarray:
    """
    Convert a sequence of dumps to an RGB image.

    Args:
        history: Interior state names per generation
        catalog: States the names refer to

    Returns:
        RGB image [T, N, 3] as uint8
    """
    rows = [[catalog.index(name) for name in names] for names in history]
    if not rows:
        return np.zeros((0, 0, 3), dtype=np.uint8)
    indices = np.array(rows, dtype=np.intp)
    return line_colors(catalog)[indices]


def save_space_time_diagram(
    history: Iterable[list[str]],
    catalog: StateCatalog,
    path: Union[str, Path],
    title: str = "",
) -> None:
    """
    Render a space-time diagram to an image file.

    Args:
        history: Interior state names per generation
        catalog: States the names refer to
        path: Output file
        title: Optional figure title
    """
    image = space_time_image(history, catalog)
    T, N = image.shape[:2]

    fig, ax = plt.subplots(figsize=(max(4.0, N * 0.15), max(4.0, T * 0.15)))
    # An empty interior still gets labelled axes
    if image.size:
        ax.imshow(image, interpolation="nearest", aspect="auto")
    ax.set_xlabel("Cell")
    ax.set_ylabel("Generation")
    if title:
        ax.set_title(title)

    fig.tight_layout()
    fig.savefig(path, dpi=100)
    plt.close(fig)
