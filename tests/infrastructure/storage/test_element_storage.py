import unittest
from unittest import TestCase

import numpy as np

from src.tensorutils.infrastructure.storage import ElementStorage


class TestElementStorage(TestCase):

    def test_construction_fills(self):
        s = ElementStorage(4, np.int32, 7)
        self.assertEqual(len(s), 4)
        self.assertEqual(s.dtype, np.int32)
        self.assertEqual(list(s), [7, 7, 7, 7])

    def test_negative_length_raises(self):
        with self.assertRaises(ValueError):
            ElementStorage(-1, np.float64)

    def test_unsupported_dtype_raises(self):
        with self.assertRaises(TypeError):
            ElementStorage(2, np.complex64)

    def test_indexed_read_write_converts(self):
        s = ElementStorage(3, np.int16)
        s[1] = 2.9
        self.assertEqual(s[1], 2)

    def test_view_is_read_only(self):
        s = ElementStorage(3, np.float64, 1.0)
        v = s.view()
        with self.assertRaises(ValueError):
            v[0] = 5.0

    def test_resize_and_append(self):
        s = ElementStorage(2, np.float32, 1.0)
        s.resize(5, 3.0)
        self.assertEqual(len(s), 5)
        self.assertTrue(np.all(s.view() == 3.0))
        s.append(4.0)
        self.assertEqual(len(s), 6)
        self.assertEqual(s[5], 4.0)
        self.assertEqual(s.dtype, np.float32)

    def test_copy_is_deep(self):
        s = ElementStorage(3, np.float64, 1.0)
        c = s.copy()
        c[0] = 9.0
        self.assertEqual(s[0], 1.0)

    def test_astype_truncates(self):
        s = ElementStorage.from_values([1.7, -1.7], np.float64)
        c = s.astype(np.int32)
        self.assertEqual(c.dtype, np.int32)
        self.assertEqual(list(c), [1, -1])

    def test_from_values_flattens(self):
        s = ElementStorage.from_values(np.arange(6).reshape(2, 3), np.float32)
        self.assertEqual(len(s), 6)
        self.assertEqual(list(s), [0, 1, 2, 3, 4, 5])
        g = ElementStorage.from_values((x for x in range(3)), np.int8)
        self.assertEqual(list(g), [0, 1, 2])

    def test_write_block_and_write_all(self):
        s = ElementStorage(5, np.int32)
        s.write_block(np.array([1, 3]), np.array([7.5, 8.5]))
        self.assertEqual(list(s), [0, 7, 0, 8, 0])
        s.write_all(np.arange(5))
        self.assertEqual(list(s), [0, 1, 2, 3, 4])
        with self.assertRaises(ValueError):
            s.write_all(np.arange(4))

    def test_fill(self):
        s = ElementStorage(3, np.uint8)
        s.fill(200)
        self.assertEqual(list(s), [200, 200, 200])

    def test_out_of_range_integers_wrap(self):
        s = ElementStorage(2, np.uint8, -1)
        self.assertEqual(list(s), [255, 255])
        s.fill(256)
        self.assertEqual(list(s), [0, 0])
        s[1] = -2
        self.assertEqual(s[1], 254)
        s.resize(1, 300)
        self.assertEqual(list(s), [44])
        s.append(-128)
        self.assertEqual(s[1], 128)

        g = ElementStorage.from_values([127, 128, -129], np.int8)
        self.assertEqual(list(g), [127, -128, 127])
        h = ElementStorage.from_values((x for x in (-1, 256)), np.uint8)
        self.assertEqual(list(h), [255, 0])


if __name__ == "__main__":
    unittest.main()
