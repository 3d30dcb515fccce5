import dataclasses

import numpy as np
import pytest

from fembasis.config import DEFAULT_SETTINGS, Settings


def test_defaults():
    assert DEFAULT_SETTINGS.dtype == np.float64
    assert DEFAULT_SETTINGS.singular_rtol is None
    assert DEFAULT_SETTINGS.singular_tolerance() == 64 * np.finfo(np.float64).eps


def test_tolerance_follows_precision():
    assert DEFAULT_SETTINGS.singular_tolerance(np.float32) == pytest.approx(
        64 * float(np.finfo(np.float32).eps)
    )
    assert Settings(dtype=np.float32).singular_tolerance() == pytest.approx(
        64 * float(np.finfo(np.float32).eps)
    )


def test_override():
    settings = Settings(singular_rtol=1e-6)
    assert settings.singular_tolerance() == 1e-6
    assert settings.singular_tolerance(np.float32) == 1e-6


def test_frozen_and_keyword_only():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_SETTINGS.singular_rtol = 1.0
    with pytest.raises(TypeError):
        Settings(np.float32)
