import unittest
from unittest import TestCase

import numpy as np

from src.tensorutils.infrastructure._dtypes import (
    DTYPE_EXTENSIONS,
    dtype_for_extension,
    extension_for,
    promote,
    resolve_dtype,
)


class TestDtypeTable(TestCase):

    def test_extension_table(self):
        expected = {
            np.float32: ".f32",
            np.float64: ".f64",
            np.longdouble: ".f80",
            np.ubyte: ".uc",
            np.byte: ".sc",
            np.ushort: ".us",
            np.uintc: ".u",
            np.short: ".s",
            np.intc: ".int",
            np.longlong: ".ll",
            np.ulonglong: ".ull",
        }
        for t, ext in expected.items():
            self.assertEqual(extension_for(t), ext, msg=str(t))

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            DTYPE_EXTENSIONS["e"] = ".f16"

    def test_extensions_are_unique(self):
        self.assertEqual(len(set(DTYPE_EXTENSIONS.values())), len(DTYPE_EXTENSIONS))

    def test_dtype_for_extension(self):
        self.assertEqual(dtype_for_extension(".f32"), np.dtype(np.float32))
        self.assertEqual(dtype_for_extension(".INT"), np.dtype(np.intc))
        self.assertIsNone(dtype_for_extension(".txt"))
        self.assertIsNone(dtype_for_extension(""))

    def test_resolve_rejects_unsupported_types(self):
        for bad in (np.bool_, np.complex128, np.float16, object, "U8"):
            with self.assertRaises(TypeError, msg=str(bad)):
                resolve_dtype(bad)

    def test_resolve_accepts_names_and_types(self):
        self.assertEqual(resolve_dtype("float32"), np.dtype(np.float32))
        self.assertEqual(resolve_dtype(np.int16), np.dtype(np.int16))

    def test_promote(self):
        self.assertEqual(promote(np.dtype(np.int32), np.dtype(np.float32)), np.float64)
        self.assertEqual(promote(np.dtype(np.float32), np.dtype(np.float64)), np.float64)
        self.assertEqual(promote(np.dtype(np.int16), np.dtype(np.int32)), np.int32)
        self.assertEqual(promote(np.dtype(np.int32), 2.5), np.float64)


if __name__ == "__main__":
    unittest.main()
