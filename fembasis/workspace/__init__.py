"""
The `fembasis.workspace` package contains the reusable evaluation workspace.
"""

from .basis_info import BasisInfo, create_workspace, evaluate, gradient_of_field

__all__ = ["BasisInfo", "create_workspace", "evaluate", "gradient_of_field"]
