"""River AOI construction.

Builds areas of interest around point sites on a river network (for
example hydroelectric dams): the river segment on one side of each site,
trimmed to a radius and buffered into a corridor, plus a plain radial
buffer around the site itself.
"""

__version__ = "0.1.0"
