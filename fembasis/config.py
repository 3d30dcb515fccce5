"""
The `fembasis.config` module holds the numerical settings shared by the geometry
routines and the evaluation workspace.
"""

import dataclasses

import numpy as np
from numpy.typing import DTypeLike

__all__ = ["Settings", "DEFAULT_SETTINGS"]


def __dir__() -> list[str]:
    return __all__


@dataclasses.dataclass(kw_only=True, frozen=True)
class Settings:
    """Numerical settings.

    Attributes:
        dtype (DTypeLike): The default precision of workspace buffers.
            Defaults to `numpy.float64`.
        singular_rtol (float | None): Relative tolerance under which a Jacobian
            determinant is considered zero. The determinant is compared against
            `singular_rtol` times the product of the row lengths of the Jacobian,
            which bounds |det(J)| from above. The ratio depends only on the angles
            between the rows, so neither scaling nor stretching an element changes
            the outcome; only collapsing it does. When None, a tolerance is
            derived from the machine epsilon of the working precision.
    """

    dtype: DTypeLike = np.float64
    singular_rtol: float | None = None

    def singular_tolerance(self, dtype: DTypeLike | None = None) -> float:
        """The relative singularity tolerance for the given precision (or for
        `self.dtype` when `dtype` is None).
        """
        if self.singular_rtol is not None:
            return self.singular_rtol
        return 64 * float(np.finfo(self.dtype if dtype is None else dtype).eps)


DEFAULT_SETTINGS = Settings()
