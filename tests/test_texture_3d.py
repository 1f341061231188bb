import numpy as np
import pytest

from radiance.texture import TextureConfig
from radiance.texture_3d import Texture3DFRGBA, Texture3DRGBA


def test_frgba_is_zeroed_float_volume():
    texture = Texture3DFRGBA(4, 3, 2)
    assert (texture.width, texture.height, texture.depth) == (4, 3, 2)
    assert texture.data.shape == (2, 3, 4, 4)
    assert texture.data.dtype == np.float32
    assert not texture.data.any()


def test_rgba_is_zeroed_byte_volume():
    texture = Texture3DRGBA(2, 2, 2)
    assert texture.data.shape == (2, 2, 2, 3)
    assert texture.data.dtype == np.uint8
    assert not texture.data.any()


def test_create_empty_texture_resizes_and_clears():
    texture = Texture3DFRGBA(2, 2, 2)
    texture.data[...] = 1.0
    texture.create_empty_texture(5, 1, 3)
    assert (texture.width, texture.height, texture.depth) == (5, 1, 3)
    assert not texture.data.any()


def test_config_kept():
    config = TextureConfig(generate_mipmap=False, scale_nearest_min=True)
    texture = Texture3DRGBA(1, 1, 1, config)
    assert texture.config is config


def test_negative_dimension_rejected():
    with pytest.raises(ValueError):
        Texture3DFRGBA(-1, 2, 2)
    texture = Texture3DRGBA(1, 1, 1)
    with pytest.raises(ValueError):
        texture.create_empty_texture(1, 1, -3)