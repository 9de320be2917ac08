"""A fixed-size array of bits with range queries and free-run scanning.

The bits are stored as 32-bit little-endian elements when serialised, so
the serialised size is always a multiple of four bytes.
"""

from .printf import hex_dump
from .rounding import div_round_up

_ELEM_BYTES = 4
_ELEM_BITS = _ELEM_BYTES * 8


class Bitmap:
    """An array of BIT_CNT bits, all initially false."""

    def __init__(self, bit_cnt):
        if bit_cnt < 0:
            raise ValueError(f"bit count must be non-negative, got {bit_cnt}")
        self._bit_cnt = bit_cnt
        self._bits = 0

    def __len__(self):
        return self._bit_cnt

    def __repr__(self):
        bits = "".join("1" if self.test(i) else "0" for i in range(self._bit_cnt))
        return f"Bitmap({bits!r})"

    def _check_index(self, idx):
        if not 0 <= idx < self._bit_cnt:
            raise IndexError(f"bit index {idx} out of range for {self._bit_cnt} bits")

    def _check_range(self, start, cnt):
        if start < 0 or cnt < 0 or start > self._bit_cnt or start + cnt > self._bit_cnt:
            raise IndexError(
                f"range {start}+{cnt} out of range for {self._bit_cnt} bits"
            )

    @staticmethod
    def _mask(start, cnt):
        return ((1 << cnt) - 1) << start

    # Single bits.

    def set(self, idx, value):
        """Set bit IDX to VALUE."""
        if value:
            self.mark(idx)
        else:
            self.reset(idx)

    def mark(self, idx):
        """Set bit IDX to true."""
        self._check_index(idx)
        self._bits |= 1 << idx

    def reset(self, idx):
        """Set bit IDX to false."""
        self._check_index(idx)
        self._bits &= ~(1 << idx)

    def flip(self, idx):
        """Toggle bit IDX."""
        self._check_index(idx)
        self._bits ^= 1 << idx

    def test(self, idx):
        """Return the value of bit IDX."""
        self._check_index(idx)
        return bool(self._bits >> idx & 1)

    # Multiple bits.

    def set_all(self, value):
        """Set every bit to VALUE."""
        self.set_multiple(0, self._bit_cnt, value)

    def set_multiple(self, start, cnt, value):
        """Set the CNT bits starting at START to VALUE."""
        self._check_range(start, cnt)
        mask = self._mask(start, cnt)
        if value:
            self._bits |= mask
        else:
            self._bits &= ~mask

    def count(self, start, cnt, value):
        """Number of bits in [START, START + CNT) that equal VALUE."""
        self._check_range(start, cnt)
        ones = bin(self._bits & self._mask(start, cnt)).count("1")
        return ones if value else cnt - ones

    def contains(self, start, cnt, value):
        """True if any bit in [START, START + CNT) equals VALUE."""
        self._check_range(start, cnt)
        mask = self._mask(start, cnt)
        selected = self._bits & mask
        return selected != 0 if value else selected != mask

    def any(self, start, cnt):
        """True if any bit in the range is set."""
        return self.contains(start, cnt, True)

    def none(self, start, cnt):
        """True if no bit in the range is set."""
        return not self.contains(start, cnt, True)

    def all(self, start, cnt):
        """True if every bit in the range is set."""
        return not self.contains(start, cnt, False)

    # Scanning.

    def scan(self, start, cnt, value):
        """Index of the first run of CNT bits at or after START all equal to
        VALUE, or None if there is none."""
        if not 0 <= start <= self._bit_cnt:
            raise IndexError(f"start {start} out of range for {self._bit_cnt} bits")
        if cnt < 0:
            raise ValueError(f"count must be non-negative, got {cnt}")
        if cnt > self._bit_cnt:
            return None
        for i in range(start, self._bit_cnt - cnt + 1):
            if not self.contains(i, cnt, not value):
                return i
        return None

    def scan_and_flip(self, start, cnt, value):
        """Like scan(), but also set the run found to the opposite of VALUE."""
        idx = self.scan(start, cnt, value)
        if idx is not None:
            self.set_multiple(idx, cnt, not value)
        return idx

    # Serialisation.

    def file_size(self):
        """Number of bytes needed to store the bitmap."""
        return _ELEM_BYTES * div_round_up(self._bit_cnt, _ELEM_BITS)

    def to_bytes(self):
        """The bitmap as little-endian 32-bit elements."""
        return self._bits.to_bytes(self.file_size(), "little")

    def read(self, file):
        """Load the bitmap from the start of the binary FILE.

        Bits beyond the bitmap's size are discarded.  Raises EOFError if the
        file holds fewer than file_size() bytes; whatever was read is kept.
        """
        if self._bit_cnt == 0:
            return
        size = self.file_size()
        file.seek(0)
        data = file.read(size)
        self._bits = int.from_bytes(data, "little") & self._mask(0, self._bit_cnt)
        if len(data) != size:
            raise EOFError(f"expected {size} bytes, read {len(data)}")

    def write(self, file):
        """Store the bitmap at the start of the binary FILE."""
        data = self.to_bytes()
        file.seek(0)
        written = file.write(data)
        if written is not None and written != len(data):
            raise OSError(f"short write: {written} of {len(data)} bytes")

    def dump(self):
        """Hexadecimal dump of the stored bytes."""
        return hex_dump(0, self.to_bytes(), False)