"""Freeform canvas layout engine.

Geometry (collision, grid snapping, alignment guides), pointer interaction
state machines and cross-container transfers for a freeform dashboard
canvas.
"""

__version__ = "0.1.0"
