import unittest

from chip8.decoder import decode, disassemble, pattern


class TestDecode(unittest.TestCase):
    def test_fields(self):
        ins = decode(0xD12A)
        self.assertEqual(ins.opcode, 0xD12A)
        self.assertEqual(ins.nibbles, (0xD, 0x1, 0x2, 0xA))
        self.assertEqual(ins.nnn, 0x12A)
        self.assertEqual(ins.kk, 0x2A)
        self.assertEqual(ins.n, 0xA)
        self.assertEqual((ins.x, ins.y), (0x1, 0x2))

    def test_pattern(self):
        self.assertEqual(pattern(0x00E0), 0x00E0)
        self.assertEqual(pattern(0x00EE), 0x00EE)
        self.assertEqual(pattern(0x1ABC), 0x1000)
        self.assertEqual(pattern(0x8AB6), 0x8006)
        self.assertEqual(pattern(0xF365), 0xF065)
        self.assertEqual(pattern(0x5AB0), 0x5000)

    def test_pattern_unknown(self):
        for opcode in (0x0000, 0x00E1, 0x5AB1, 0x800F, 0x9AB2, 0xE19F, 0xF100):
            with self.subTest(opcode=hex(opcode)):
                self.assertIsNone(pattern(opcode))


class TestDisassemble(unittest.TestCase):
    def test_mnemonics(self):
        self.assertEqual(disassemble(0x00E0), "CLS")
        self.assertEqual(disassemble(0x2345), "CALL 0x345")
        self.assertEqual(disassemble(0x6A0F), "LD VA, 0x0f")
        self.assertEqual(disassemble(0xD125), "DRW V1, V2, 5")
        self.assertEqual(disassemble(0xFB33), "LD B, VB")

    def test_unknown_is_data_word(self):
        self.assertEqual(disassemble(0xFFFF), "DW 0xffff")


if __name__ == "__main__":
    unittest.main()
