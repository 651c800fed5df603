"""Interactive pygame graph editor with step-by-step Kruskal and Boruvka spanning trees."""

__version__ = "0.1.0"