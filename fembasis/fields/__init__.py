"""
The `fembasis.fields` package interpolates nodal fields and their physical
gradients.
"""

from .field import field_grad, interpolate

__all__ = ["interpolate", "field_grad"]
