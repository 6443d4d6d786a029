import unittest

from chip8.keypad import Keypad


class TestKeypad(unittest.TestCase):
    def test_set_and_get(self):
        k = Keypad()
        self.assertTrue(k.untouched())
        k[0xA] = True
        self.assertTrue(k[0xA])
        self.assertFalse(k.untouched())
        self.assertEqual(len(k.keys), 16)

    def test_first(self):
        k = Keypad()
        self.assertIsNone(k.first())
        k[9] = k[4] = True
        self.assertEqual(k.first(), 4)

    def test_out_of_range(self):
        k = Keypad()
        self.assertRaises(ValueError, k.__getitem__, 16)
        self.assertRaises(ValueError, k.__setitem__, -1, True)
        k.wait(0)
        self.assertRaises(ValueError, k.answer, 0x10)

    def test_wait_and_answer(self):
        k = Keypad()
        k[3] = True
        k.wait(0x5)
        self.assertTrue(k.untouched())
        self.assertEqual(k.waiting, 0x5)
        self.assertEqual(k.answer(3), 0x5)
        self.assertIsNone(k.waiting)
        self.assertIsNone(k.answer(3))

    def test_answer_without_wait_ignores_key(self):
        k = Keypad()
        self.assertIsNone(k.answer(0x10))


if __name__ == "__main__":
    unittest.main()
