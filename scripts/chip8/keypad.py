from .constants import NUM_KEYS


class Keypad:
    """
    state of the 16 hex keys, owned by the host which sets it on every poll

    `waiting` holds the register an Fx0A instruction is waiting to fill,
    None while the machine is free to run
    """

    def __init__(self):
        self.keys = [False] * NUM_KEYS
        self.waiting = None

    def __getitem__(self, key):
        return self.keys[self._check(key)]

    def __setitem__(self, key, value):
        self.keys[self._check(key)] = bool(value)

    @staticmethod
    def _check(key):
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"The CHIP-8 keypad has keys 0x0 to 0xF, got {key!r}")
        return key

    def clear(self):
        self.keys = [False] * NUM_KEYS

    def untouched(self):
        return not any(self.keys)

    def first(self):
        """get the lowest key currently pressed, None if there is none"""
        for key, pressed in enumerate(self.keys):
            if pressed:
                return key
        return None

    def wait(self, register):
        self.clear()
        self.waiting = register

    def answer(self, key):
        """resolve a pending wait with key, return the register to fill or None if nothing was waiting"""
        if self.waiting is None:
            return None
        self._check(key)
        register, self.waiting = self.waiting, None
        return register

    def reset(self):
        self.clear()
        self.waiting = None
