import unittest
from unittest import TestCase

import numpy as np

from src.tensorutils.domain._errors import RankMismatchError, ShapeMismatchError
from src.tensorutils.infrastructure.config import default_dtype
from src.tensorutils.infrastructure.tensor import Tensor


class TestTensorCopies(TestCase):

    def test_clone_is_deep(self):
        t = Tensor((2, 2), 1.0, fixed_rank=2)
        c = t.clone()
        self.assertIsNot(c, t)
        self.assertEqual(c.fixed_rank, 2)
        c.set_at((0, 0), 5.0)
        self.assertEqual(t.at(0, 0), 1.0)

    def test_copy_from_converts_dtype(self):
        dest = Tensor((1,), dtype=np.int32)
        src = Tensor.from_numpy(np.array([[1.9, 2.2], [-3.7, 4.0]]))
        dest.copy_from(src)
        self.assertEqual(dest.shape, (2, 2))
        self.assertEqual(dest.dtype, np.int32)
        self.assertEqual(dest.to_numpy().tolist(), [[1, 2], [-3, 4]])
        src.set_at((0, 0), 100.0)
        self.assertEqual(dest.at(0, 0), 1)

    def test_copy_from_respects_fixed_rank(self):
        dest = Tensor((2, 2), 7.0, fixed_rank=2)
        with self.assertRaises(RankMismatchError):
            dest.copy_from(Tensor((4,), 1.0))
        self.assertEqual(dest.shape, (2, 2))
        self.assertTrue(np.all(dest.to_numpy() == 7.0))
        dest.copy_from(Tensor((3, 1), 2.0))
        self.assertEqual(dest.shape, (3, 1))

    def test_astype(self):
        t = Tensor.from_numpy(np.array([1.5, -2.5, 3.99]), fixed_rank=1)
        i = t.astype(np.int16)
        self.assertEqual(i.dtype, np.int16)
        self.assertEqual(i.fixed_rank, 1)
        self.assertEqual(i.to_numpy().tolist(), [1, -2, 3])
        self.assertEqual(t.dtype, np.float64)
        with self.assertRaises(TypeError):
            t.astype(np.complex64)

    def test_fill(self):
        t = Tensor((2, 3), dtype=np.uint8)
        t.fill(9)
        self.assertTrue(np.all(t.to_numpy() == 9))


class TestTensorNumpyInterop(TestCase):

    def test_from_numpy_keeps_supported_dtype(self):
        t = Tensor.from_numpy(np.zeros((2, 3), dtype=np.float32))
        self.assertEqual(t.shape, (2, 3))
        self.assertEqual(t.dtype, np.float32)

    def test_from_numpy_unsupported_dtype_uses_default(self):
        with default_dtype(np.float32):
            t = Tensor.from_numpy(np.array([True, False]))
        self.assertEqual(t.dtype, np.float32)
        self.assertEqual(t.to_numpy().tolist(), [1.0, 0.0])

    def test_from_numpy_copies(self):
        arr = np.ones((2,))
        t = Tensor.from_numpy(arr)
        arr[0] = 5.0
        self.assertEqual(t.at(0), 1.0)

    def test_to_numpy_does_not_alias(self):
        t = Tensor((2,), 1.0)
        arr = t.to_numpy()
        arr[0] = 9.0
        self.assertEqual(t.at(0), 1.0)

    def test_from_flat(self):
        t = Tensor.from_flat((2, 2), [1, 2, 3, 4], dtype=np.int64)
        self.assertEqual(t.to_numpy().tolist(), [[1, 2], [3, 4]])
        with self.assertRaises(ShapeMismatchError):
            Tensor.from_flat((2, 2), [1, 2, 3])

    def test_from_flat_fixed_rank(self):
        t = Tensor.from_flat((3,), [1.0, 2.0, 3.0], fixed_rank=1)
        self.assertEqual(t.fixed_rank, 1)
        with self.assertRaises(RankMismatchError):
            Tensor.from_flat((3,), [1.0, 2.0, 3.0], fixed_rank=2)

    def test_copy_from_numpy(self):
        t = Tensor((2, 2), dtype=np.int32)
        t.copy_from_numpy(np.array([[1.5, 2.5], [3.5, 4.5]]))
        self.assertEqual(t.to_numpy().tolist(), [[1, 2], [3, 4]])
        with self.assertRaises(ShapeMismatchError):
            t.copy_from_numpy(np.zeros(3))


if __name__ == "__main__":
    unittest.main()
