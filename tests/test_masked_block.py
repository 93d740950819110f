"""Masked block: layout checks, zeroed invalid pixels, validity channel encoding."""

import numpy as np
import pytest

from pixel_mask import GRAY, RGB, MaskedBlock, MaskedPixel, ViewShapeMismatch


def _values():
    return np.array([[[1, 2, 3], [4, 5, 6]]], dtype=np.uint8)


def test_invalid_positions_are_zeroed():
    block = MaskedBlock(_values(), np.array([[False, True]]), RGB)
    assert block.values[0, 0].tolist() == [0, 0, 0]
    assert block.values[0, 1].tolist() == [4, 5, 6]
    assert block.valid_count == 1


def test_arrays_are_read_only():
    block = MaskedBlock(_values(), np.array([[True, True]]), RGB)
    assert not block.values.flags.writeable
    assert not block.valid.flags.writeable


def test_input_arrays_are_not_modified():
    values = _values()
    MaskedBlock(values, np.array([[False, False]]), RGB)
    assert values[0, 0].tolist() == [1, 2, 3]


def test_kind_inferred_and_two_dimensional_values():
    block = MaskedBlock(np.array([[1, 2]], dtype=np.uint8), np.array([[True, False]]))
    assert block.kind is GRAY
    assert block.shape == (1, 2)


def test_shape_checks():
    with pytest.raises(ViewShapeMismatch):
        MaskedBlock(_values(), np.array([[True]]), RGB)
    with pytest.raises(ViewShapeMismatch):
        MaskedBlock(_values(), np.array([[True, True]]), GRAY)
    with pytest.raises(ViewShapeMismatch):
        MaskedBlock(np.zeros(3, dtype=np.uint8), np.array([True, True, True]))


def test_pixel_access():
    block = MaskedBlock(_values(), np.array([[False, True]]), RGB)
    assert block.pixel(1, 0) == MaskedPixel(RGB(4, 5, 6, dtype=np.uint8))
    assert block.pixel(0, 0) == MaskedPixel.default(RGB, np.uint8)


def test_validity_channel_and_stacked_layout():
    block = MaskedBlock(_values(), np.array([[False, True]]), RGB)
    assert block.validity_channel().tolist() == [[0, 255]]
    stacked = block.as_array()
    assert stacked.shape == (1, 2, 4)
    assert stacked[0, 1].tolist() == [4, 5, 6, 255]
    assert MaskedBlock.from_array(stacked, RGB) == block


def test_from_array_rejects_intermediate_validity():
    arr = np.array([[[1, 2, 3, 128]]], dtype=np.uint8)
    with pytest.raises(ValueError):
        MaskedBlock.from_array(arr, RGB)


def test_invalid_block():
    block = MaskedBlock.invalid(RGB, 2, 3, np.float32)
    assert block.shape == (2, 3)
    assert block.dtype == np.float32
    assert block.valid_count == 0


def test_concatenate_rows_keeps_order():
    top = MaskedBlock(_values(), np.array([[True, False]]), RGB)
    bottom = MaskedBlock(_values() + 1, np.array([[True, True]]), RGB)
    both = MaskedBlock.concatenate_rows([top, bottom])
    assert both.shape == (2, 2)
    assert both.valid.tolist() == [[True, False], [True, True]]
    assert both.values[1, 0].tolist() == [2, 3, 4]


def test_concatenate_rows_rejects_mismatched_width():
    a = MaskedBlock(_values(), np.array([[True, True]]), RGB)
    b = MaskedBlock.invalid(RGB, 1, 3, np.uint8)
    with pytest.raises(ViewShapeMismatch):
        MaskedBlock.concatenate_rows([a, b])


def test_repr():
    block = MaskedBlock(_values(), np.array([[False, True]]), RGB)
    assert repr(block) == "MaskedBlock(rgb, 2x1, dtype=uint8, valid=1/2)"


def test_pixel_access_out_of_bounds():
    block = MaskedBlock(_values(), np.array([[False, True]]), RGB)
    with pytest.raises(IndexError):
        block.pixel(-1, 0)
    with pytest.raises(IndexError):
        block.pixel(0, 1)
    with pytest.raises(IndexError):
        block.pixel(2, 0)
