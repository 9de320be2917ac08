"""RC4-based pseudo-random number generator.

RC4 is used for its simplicity, not for any cryptographic property.
"""

_SEED_BYTES = 4
_SEED_MAX = (1 << (8 * _SEED_BYTES)) - 1


class Rc4Random:
    """A pseudo-random byte generator keyed by a 32-bit unsigned seed."""

    def __init__(self, seed=0):
        self._s = []
        self._i = 0
        self._j = 0
        self.reseed(seed)

    def reseed(self, seed):
        """Reinitialise the generator with SEED, a 32-bit unsigned integer."""
        if not 0 <= seed <= _SEED_MAX:
            raise ValueError(f"seed must fit in 32 unsigned bits, got {seed}")
        key = seed.to_bytes(_SEED_BYTES, "little")
        s = list(range(256))
        j = 0
        for i in range(256):
            j = (j + s[i] + key[i % _SEED_BYTES]) & 0xFF
            s[i], s[j] = s[j], s[i]
        self._s = s
        self._i = 0
        self._j = 0

    def _next_byte(self):
        s = self._s
        self._i = (self._i + 1) & 0xFF
        self._j = (self._j + s[self._i]) & 0xFF
        s[self._i], s[self._j] = s[self._j], s[self._i]
        return s[(s[self._i] + s[self._j]) & 0xFF]

    def random_bytes(self, size):
        """Return SIZE pseudo-random bytes."""
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        return bytes(self._next_byte() for _ in range(size))

    def random_ulong(self):
        """Return a pseudo-random 32-bit unsigned integer."""
        return int.from_bytes(self.random_bytes(4), "little")