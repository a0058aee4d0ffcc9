"""Space Map Explorer package.

Interactive 2D star map: catalog and constellation graph, sky projection,
viewport state and the Qt widget that draws it.
"""

__all__ = [
    'app', 'main_window', 'catalog', 'data_manager', 'projection', 'render',
    'search', 'settings', 'sky_view', 'sky_view_2d', 'export',
]
