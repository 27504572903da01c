"""
Debug-info table shared by the code generators of one compilation.

The emitted program keeps a runtime stack of small integers; each integer
indexes this table, whose entries read ``context@uri@line``. Traces are
rebuilt from these entries alone, without the host's native call stack.

Author: xwest
"""

from typing import Dict, List


class DebugInfoTable:
    """
    Append-only interning table of ``context@uri@line`` strings.

    Index 0 is a sentinel. Every distinct triple is stored once; interning
    the same triple again returns the index it already has.
    """

    SENTINEL = "??@??@??"

    def __init__(self):
        self._entries: List[str] = [self.SENTINEL]
        self._indices: Dict[str, int] = {}

    def intern(self, context: str, uri: str, line: int) -> int:
        """Return the index for (context, uri, line), adding it if new."""
        message = f"{context}@{uri}@{line}"
        index = self._indices.get(message)
        if index is None:
            index = len(self._entries)
            self._indices[message] = index
            self._entries.append(message)
        return index

    def entries(self) -> List[str]:
        """A copy of the table, in index order."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> str:
        return self._entries[index]
