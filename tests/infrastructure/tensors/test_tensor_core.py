import unittest
from unittest import TestCase

import numpy as np

from src.tensorutils.domain._errors import RankMismatchError, ShapeMismatchError
from src.tensorutils.domain._tensor import ITensor
from src.tensorutils.infrastructure.config import get_settings
from src.tensorutils.infrastructure.tensor import Tensor


class TestTensorConstruction(TestCase):

    def test_shape_properties(self):
        t = Tensor((2, 3, 5, 7), 1.0, dtype=np.float64)
        self.assertEqual(t.shape, (2, 3, 5, 7))
        self.assertEqual(t.dims, (2, 3, 5, 7))
        self.assertEqual(t.rank, 4)
        self.assertEqual(t.size, 210)
        self.assertEqual(t.strides, (105, 35, 7, 1))
        self.assertEqual(t.dtype, np.float64)
        self.assertIsNone(t.fixed_rank)
        self.assertTrue(np.all(t.to_numpy() == 1.0))

    def test_default_is_scalar_with_default_dtype(self):
        t = Tensor()
        self.assertEqual(t.shape, ())
        self.assertEqual(t.rank, 0)
        self.assertEqual(t.size, 1)
        self.assertEqual(t.dtype, get_settings().default_dtype)
        self.assertEqual(t.at(), 0)

    def test_fixed_rank_default_is_empty(self):
        t = Tensor(fixed_rank=3)
        self.assertEqual(t.shape, (0, 0, 0))
        self.assertEqual(t.size, 0)
        self.assertEqual(t.fixed_rank, 3)

    def test_fixed_rank_mismatch_on_construction(self):
        with self.assertRaises(RankMismatchError):
            Tensor((2, 3), fixed_rank=3)

    def test_invalid_fixed_rank(self):
        with self.assertRaises(ValueError):
            Tensor(fixed_rank=-1)
        with self.assertRaises(TypeError):
            Tensor(fixed_rank=2.0)

    def test_invalid_dims(self):
        with self.assertRaises(ValueError):
            Tensor((2, -1))
        with self.assertRaises(TypeError):
            Tensor((2, 3.5))

    def test_unsupported_dtype(self):
        with self.assertRaises(TypeError):
            Tensor((2,), dtype=np.complex128)
        with self.assertRaises(TypeError):
            Tensor((2,), dtype=bool)

    def test_fill_converts_to_narrow_dtype(self):
        t = Tensor((2,), -1, dtype=np.uint8)
        self.assertEqual(t.to_numpy().tolist(), [255, 255])
        t.fill(300)
        self.assertEqual(t.to_numpy().tolist(), [44, 44])
        t.set_at((1,), -2)
        self.assertEqual(t.at(1), 254)
        t.alloc((1,), 1000)
        self.assertEqual(t.at(0), 232)

    def test_satisfies_protocol(self):
        self.assertIsInstance(Tensor((1,)), ITensor)

    def test_repr_mentions_shape_and_fixed_rank(self):
        r = repr(Tensor((2, 3), dtype=np.int32, fixed_rank=2))
        self.assertIn("(2, 3)", r)
        self.assertIn("int32", r)
        self.assertIn("fixed_rank=2", r)


class TestTensorAlloc(TestCase):

    def test_alloc_replaces_shape_and_fills(self):
        t = Tensor((2,), dtype=np.int32)
        out = t.alloc((3, 4), 5)
        self.assertIs(out, t)
        self.assertEqual(t.shape, (3, 4))
        self.assertEqual(t.dtype, np.int32)
        self.assertTrue(np.all(t.to_numpy() == 5))

    def test_alloc_respects_fixed_rank(self):
        t = Tensor((2, 2, 2), 1.0, fixed_rank=3)
        t.alloc((4, 1, 2), 2.0)
        self.assertEqual(t.shape, (4, 1, 2))
        with self.assertRaises(RankMismatchError):
            t.alloc((4, 2), 3.0)
        # unchanged after the failed call
        self.assertEqual(t.shape, (4, 1, 2))
        self.assertTrue(np.all(t.to_numpy() == 2.0))

    def test_alloc_dynamic_rank_may_change_rank(self):
        t = Tensor((2, 2))
        t.alloc((1, 2, 3, 4, 5, 6, 7, 8, 9))
        self.assertEqual(t.rank, 9)
        self.assertEqual(t.size, 362880)


class TestTensorElementAccess(TestCase):

    def setUp(self):
        self.t = Tensor.from_numpy(np.arange(210, dtype=np.int64).reshape(2, 3, 5, 7))

    def test_full_index(self):
        self.assertEqual(self.t.at(1, 2, 4, 6), 209)
        self.assertEqual(self.t(1, 0, 0, 1), 106)

    def test_partial_index_reads_corner(self):
        self.assertEqual(self.t.at(1, 2), self.t.at(1, 2, 0, 0))
        self.assertEqual(self.t(1, 2), 105 + 70)
        self.assertEqual(self.t.at(), 0)

    def test_too_many_indices(self):
        with self.assertRaises(RankMismatchError):
            self.t.at(0, 0, 0, 0, 0)

    def test_out_of_range(self):
        with self.assertRaises(IndexError):
            self.t.at(2)
        with self.assertRaises(IndexError):
            self.t.at(0, 0, 0, -1)

    def test_scalar_cannot_be_indexed(self):
        s = Tensor((), 4.0)
        self.assertEqual(s.at(), 4.0)
        with self.assertRaises(ShapeMismatchError):
            s.at(0)

    def test_set_at_converts_and_pads(self):
        t = Tensor((2, 3), dtype=np.int32)
        t.set_at((1, 2), 7.9)
        self.assertEqual(t.at(1, 2), 7)
        t.set_at((1,), 4)
        self.assertEqual(t.at(1, 0), 4)
        with self.assertRaises(IndexError):
            t.set_at((2, 0), 1)

    def test_iter_flat_row_major(self):
        t = Tensor.from_numpy(np.array([[1, 2], [3, 4]], dtype=np.int16))
        self.assertEqual(list(t.iter_flat()), [1, 2, 3, 4])

    def test_array_protocol(self):
        arr = np.asarray(self.t)
        self.assertEqual(arr.shape, (2, 3, 5, 7))
        self.assertEqual(arr[1, 2, 4, 6], 209)


if __name__ == "__main__":
    unittest.main()
