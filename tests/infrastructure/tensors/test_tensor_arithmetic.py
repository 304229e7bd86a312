import unittest
from unittest import TestCase

import numpy as np

from src.tensorutils.domain._errors import ShapeMismatchError
from src.tensorutils.infrastructure.tensor import Tensor


def _t(values, dtype=np.float64):
    return Tensor.from_numpy(np.array(values, dtype=dtype))


class TestTensorArithmetic(TestCase):

    def test_add_same_shape(self):
        c = _t([[1, 2], [3, 4]]) + _t([[10, 20], [30, 40]])
        self.assertEqual(c.to_numpy().tolist(), [[11, 22], [33, 44]])

    def test_operands_need_equal_size_not_shape(self):
        a = _t([[1, 2, 3], [4, 5, 6]])
        b = _t([[1, 1], [1, 1], [1, 1]])
        c = a + b
        self.assertEqual(c.shape, (2, 3))
        self.assertEqual(c.to_numpy().tolist(), [[2, 3, 4], [5, 6, 7]])

    def test_size_mismatch(self):
        with self.assertRaises(ShapeMismatchError):
            _t([1, 2, 3]) + _t([1, 2])
        with self.assertRaises(ShapeMismatchError):
            _t([1, 2, 3]) * _t([[1, 2], [3, 4]])

    def test_scalar_operands(self):
        a = _t([1, 2, 4])
        self.assertEqual((a + 1).to_numpy().tolist(), [2, 3, 5])
        self.assertEqual((1 + a).to_numpy().tolist(), [2, 3, 5])
        self.assertEqual((a - 1).to_numpy().tolist(), [0, 1, 3])
        self.assertEqual((10 - a).to_numpy().tolist(), [9, 8, 6])
        self.assertEqual((a * 3).to_numpy().tolist(), [3, 6, 12])
        self.assertEqual((3 * a).to_numpy().tolist(), [3, 6, 12])
        self.assertEqual((a / 2).to_numpy().tolist(), [0.5, 1.0, 2.0])
        self.assertEqual((8 / a).to_numpy().tolist(), [8.0, 4.0, 2.0])

    def test_subtraction_and_multiplication(self):
        a = _t([5, 6])
        b = _t([1, 2])
        self.assertEqual((a - b).to_numpy().tolist(), [4, 4])
        self.assertEqual((a * b).to_numpy().tolist(), [5, 12])

    def test_type_promotion(self):
        i = _t([1, 2], dtype=np.int32)
        f = _t([0.5, 0.5], dtype=np.float32)
        self.assertEqual((i + f).dtype, np.float64)
        self.assertEqual((i + i).dtype, np.int32)
        self.assertEqual((f * f).dtype, np.float32)
        self.assertEqual((i * 2.5).dtype, np.float64)
        self.assertEqual((f + 1.0).dtype, np.float32)

    def test_integer_true_division_is_floating(self):
        c = _t([3, 4], dtype=np.int32) / _t([2, 8], dtype=np.int32)
        self.assertEqual(c.dtype.kind, "f")
        self.assertEqual(c.to_numpy().tolist(), [1.5, 0.5])

    def test_division_by_zero_follows_ieee(self):
        c = _t([1.0, -1.0, 0.0]) / 0.0
        arr = c.to_numpy()
        self.assertEqual(arr[0], np.inf)
        self.assertEqual(arr[1], -np.inf)
        self.assertTrue(np.isnan(arr[2]))

    def test_inplace_keeps_receiver_and_dtype(self):
        a = _t([1, 2], dtype=np.int32)
        ref = a
        a += 2.7
        self.assertIs(a, ref)
        self.assertEqual(a.dtype, np.int32)
        self.assertEqual(a.to_numpy().tolist(), [3, 4])

        a *= _t([2, 3], dtype=np.float64)
        self.assertEqual(a.to_numpy().tolist(), [6, 12])
        a -= 1
        self.assertEqual(a.to_numpy().tolist(), [5, 11])
        a /= 2
        self.assertEqual(a.to_numpy().tolist(), [2, 5])

    def test_narrow_dtype_with_out_of_range_scalar(self):
        a = Tensor((2,), 1, dtype=np.int8)
        c = a + 1000
        self.assertEqual(c.dtype, np.int64)
        self.assertEqual(c.to_numpy().tolist(), [1001, 1001])
        self.assertEqual((1000 - a).to_numpy().tolist(), [999, 999])
        self.assertEqual((a + 1).dtype, np.int8)

        u = Tensor((2,), 3, dtype=np.uint8)
        self.assertEqual((u * -1).to_numpy().tolist(), [-3, -3])

    def test_narrow_dtype_inplace_wraps(self):
        a = Tensor((2,), 1, dtype=np.int8)
        a += 1000
        self.assertEqual(a.dtype, np.int8)
        self.assertEqual(a.to_numpy().tolist(), [-23, -23])

        u = Tensor((1,), 0, dtype=np.uint8)
        u -= 1
        self.assertEqual(u.to_numpy().tolist(), [255])

    def test_inplace_size_mismatch_leaves_receiver_unchanged(self):
        a = _t([1.0, 2.0])
        with self.assertRaises(ShapeMismatchError):
            a += _t([1.0, 2.0, 3.0])
        self.assertEqual(a.to_numpy().tolist(), [1.0, 2.0])

    def test_result_keeps_left_shape_and_fixed_rank(self):
        a = Tensor((2, 3), 1.0, fixed_rank=2)
        b = Tensor((6,), 2.0)
        c = a + b
        self.assertEqual(c.shape, (2, 3))
        self.assertEqual(c.fixed_rank, 2)
        d = b + a
        self.assertEqual(d.shape, (6,))
        self.assertIsNone(d.fixed_rank)

    def test_operands_not_modified(self):
        a = _t([1.0, 2.0])
        b = _t([3.0, 4.0])
        _ = a + b
        self.assertEqual(a.to_numpy().tolist(), [1.0, 2.0])
        self.assertEqual(b.to_numpy().tolist(), [3.0, 4.0])

    def test_unary(self):
        a = _t([1.0, -2.0])
        self.assertEqual((-a).to_numpy().tolist(), [-1.0, 2.0])
        p = +a
        self.assertIsNot(p, a)
        self.assertEqual(p.to_numpy().tolist(), [1.0, -2.0])

    def test_unsupported_operand(self):
        with self.assertRaises(TypeError):
            _t([1.0]) + "x"
        with self.assertRaises(TypeError):
            _t([1.0]) * [1.0]

    def test_scalar_tensors(self):
        c = Tensor((), 2.0) * Tensor((), 4.0)
        self.assertEqual(c.shape, ())
        self.assertEqual(c.at(), 8.0)


if __name__ == "__main__":
    unittest.main()
