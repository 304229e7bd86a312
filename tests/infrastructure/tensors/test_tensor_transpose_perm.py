import itertools
import unittest
from unittest import TestCase

import numpy as np

from src.tensorutils.domain._errors import ShapeMismatchError
from src.tensorutils.infrastructure.tensor import Tensor


def _arange(dims, dtype=np.float64):
    size = int(np.prod(dims))
    return Tensor.from_numpy(np.arange(size, dtype=dtype).reshape(dims))


class TestTensorTranspose(TestCase):

    def test_element_mapping_for_every_permutation(self):
        t = _arange((2, 3, 4))
        for perm in itertools.permutations(range(3)):
            out = t.transpose(perm)
            self.assertEqual(out.shape, tuple(t.shape[p] for p in perm))
            for j in itertools.product(*(range(d) for d in out.shape)):
                k = [0] * 3
                for i, p in enumerate(perm):
                    k[p] = j[i]
                self.assertEqual(out.at(*j), t.at(*k))

    def test_inverse_permutation_round_trip(self):
        t = _arange((2, 3, 4, 5))
        for perm in itertools.permutations(range(4)):
            inverse = tuple(np.argsort(perm))
            back = t.transpose(perm).transpose(inverse)
            self.assertEqual(back.shape, t.shape, msg=str(perm))
            self.assertTrue(
                np.array_equal(back.to_numpy(), t.to_numpy()), msg=str(perm)
            )

    def test_default_reverses_axes(self):
        t = _arange((2, 3, 5))
        self.assertEqual(t.transpose().shape, (5, 3, 2))
        self.assertTrue(
            np.array_equal(t.T.to_numpy(), np.transpose(t.to_numpy()))
        )

    def test_result_owns_fresh_storage(self):
        t = _arange((2, 3))
        out = t.transpose((1, 0))
        out.set_at((0, 0), 100.0)
        self.assertEqual(t.at(0, 0), 0.0)

    def test_preserves_dtype_and_fixed_rank(self):
        t = Tensor((2, 3), 1, dtype=np.int16, fixed_rank=2)
        out = t.transpose((1, 0))
        self.assertEqual(out.dtype, np.int16)
        self.assertEqual(out.fixed_rank, 2)

    def test_invalid_permutations(self):
        t = _arange((2, 3, 4))
        for bad in ((0, 1), (0, 1, 2, 3), (0, 0, 1), (0, 1, 3), (-1, 0, 1)):
            with self.assertRaises(ShapeMismatchError, msg=str(bad)):
                t.transpose(bad)

    def test_scalar_identity(self):
        s = Tensor((), 3.0)
        self.assertEqual(s.transpose(()).at(), 3.0)
        self.assertEqual(s.transpose().shape, ())


if __name__ == "__main__":
    unittest.main()
