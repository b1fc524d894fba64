import unittest

from metadata_file.buffers import GrowableBuffer, GrowableList
from metadata_file.errors import MetadataOutOfMemory


class TestGrowableBuffer(unittest.TestCase):
    def test_appends_preserve_previous_content(self) -> None:
        buf = GrowableBuffer()
        self.assertFalse(buf)
        for chunk in (b"line one", b"\n", b"", "żółw".encode("utf-8")):
            buf.append(chunk)
        self.assertTrue(buf)
        self.assertEqual(buf.getvalue(), "line one\nżółw".encode("utf-8"))
        self.assertEqual(buf.decode(), "line one\nżółw")
        self.assertEqual(len(buf), len("line one\nżółw".encode("utf-8")))

    def test_many_small_appends(self) -> None:
        buf = GrowableBuffer(b"x")
        for _ in range(10000):
            buf.append(b"ab")
        self.assertEqual(len(buf), 20001)
        self.assertTrue(buf.getvalue().startswith(b"xabab"))

    def test_failed_growth_keeps_content(self) -> None:
        class _FullArray(bytearray):
            def __iadd__(self, other):
                raise MemoryError

        buf = GrowableBuffer(b"kept")
        buf._data = _FullArray(buf._data)
        with self.assertRaises(MetadataOutOfMemory):
            buf.append(b"lost")
        self.assertEqual(buf.getvalue(), b"kept")


class TestGrowableList(unittest.TestCase):
    def test_finish_appends_sentinel(self) -> None:
        items: GrowableList[str] = GrowableList()
        items.push("a")
        items.push("b")
        self.assertEqual(len(items), 2)
        self.assertEqual(items.finish("END"), ("a", "b", "END"))

    def test_memory_error_is_reported_as_out_of_memory(self) -> None:
        class _FullList(list):
            def append(self, item):
                raise MemoryError

        items: GrowableList[str] = GrowableList()
        items.push("kept")
        items._items = _FullList(items._items)
        with self.assertRaises(MetadataOutOfMemory):
            items.push("lost")
        self.assertEqual(list(items._items), ["kept"])


if __name__ == "__main__":
    unittest.main()
