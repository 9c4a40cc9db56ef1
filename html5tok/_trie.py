from bisect import bisect_left
from collections.abc import Mapping


class Trie(Mapping):
    """Read-only mapping with prefix queries over its string keys.

    Keys are kept sorted so that prefix lookups are a binary search. The
    bounds of the last prefix search are cached, since the entity decoder
    asks about a growing prefix one character at a time.
    """

    def __init__(self, data):
        if not all(isinstance(x, str) for x in data.keys()):
            raise TypeError("All keys must be strings")

        self._data = data
        self._keys = sorted(data.keys())
        self._cachestr = ""
        self._cachepoints = (0, len(self._keys))

    def __contains__(self, key):
        return key in self._data

    def __len__(self):
        return len(self._data)

    def __iter__(self):
        return iter(self._data)

    def __getitem__(self, key):
        return self._data[key]

    def _search(self, prefix):
        """Return the bounds of the sorted keys starting with ``prefix``."""
        if prefix.startswith(self._cachestr):
            lo, hi = self._cachepoints
        else:
            lo, hi = 0, len(self._keys)

        start = bisect_left(self._keys, prefix, lo, hi)
        if not prefix or ord(prefix[-1]) == 0x10FFFF:
            end = hi
        else:
            # The first string past every key that starts with prefix
            bound = prefix[:-1] + chr(ord(prefix[-1]) + 1)
            end = bisect_left(self._keys, bound, start, hi)

        self._cachestr = prefix
        self._cachepoints = (start, end)
        return start, end

    def has_keys_with_prefix(self, prefix):
        start, end = self._search(prefix)
        return start < end

    def longest_prefix(self, prefix):
        if prefix in self:
            return prefix

        for i in range(1, len(prefix) + 1):
            if prefix[:-i] in self:
                return prefix[:-i]

        raise KeyError(prefix)
