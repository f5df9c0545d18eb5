"""Tile Map Service imagery provider.

Configures a TMS imagery source for a tiled-map rendering client: reads
the ``tilemapresource.xml`` descriptor published next to a tile pyramid,
reconciles it with caller overrides, and builds tile URLs for the
renderer to request.
"""

__version__ = "0.1.0"
