"""
notecanvas: decompose long markdown documents into linked atomic notes on
a canvas, and keep connection backlinks in sync with the canvas' edges.
"""

__version__ = "0.1.0"
