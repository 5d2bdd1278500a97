import matplotlib.pyplot as plt

from .voronoi import clipped_regions


def plot_voronoi(diagram, box, ax=None):
    if ax is None:
        fig, ax = plt.subplots()

    for region, polygon in clipped_regions(box, diagram):
        x, y = polygon.exterior.xy
        ax.plot(x, y, "-k")
        ax.plot(*region.site.position, ".r")

    ax.set_xlim(box.min_x, box.max_x)
    ax.set_ylim(box.min_y, box.max_y)
    ax.set_aspect("equal")
    ax.set_title("Voronoi diagram")
    return ax
