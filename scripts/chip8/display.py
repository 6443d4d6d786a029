from .constants import PIXEL_OFF, PIXEL_ON, SCREEN_HEIGHT, SCREEN_WIDTH


# ******************** I/O SECTION
class Display:
    """
    the 64x32 monochrome framebuffer, one byte per pixel in row-major order

    nothing here knows how pixels end up on a real screen: the host reads
    `buffer` whenever `updated` is set and redraws it however it likes
    """

    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT):
        self.w, self.h = w, h
        self.buffer = bytearray(w * h)
        self.updated = False

    def read_pixel(self, x, y):
        """return 1 if pixel is ON, return 0 if pixel is OFF"""
        return 1 if self.buffer[y * self.w + x] else 0

    def write_pixel(self, x, y, on):
        self.buffer[y * self.w + x] = PIXEL_ON if on else PIXEL_OFF

    def clear(self):
        self.buffer[:] = bytes(len(self.buffer))
        self.updated = True

    def sprite(self, x, y, rows):
        """
        XOR an 8 pixels wide sprite onto the framebuffer, one byte per row,
        return True if any pixel that was ON got switched OFF

        the origin wraps around the screen, the sprite itself does not:
        bits running past the right edge are dropped for that row,
        while rows running past the bottom edge continue from the top
        """
        x, y = x % self.w, y % self.h
        collided = False
        for sprite_byte in rows:
            for j in range(8):
                x_coordinate = x + j
                if x_coordinate >= self.w:
                    break
                bit = (sprite_byte >> (7 - j)) & 0x1
                pixel_state = self.read_pixel(x_coordinate, y)
                if pixel_state and bit:
                    collided = True
                self.write_pixel(x_coordinate, y, pixel_state ^ bit)
            y = (y + 1) % self.h
        self.updated = True
        return collided

    def rows(self):
        for y in range(self.h):
            yield [self.read_pixel(x, y) for x in range(self.w)]

    def __str__(self):
        return "\n".join("".join("#" if p else "." for p in row) for row in self.rows())
