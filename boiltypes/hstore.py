"""Key/value maps stored in PostgreSQL ``hstore`` columns."""

from __future__ import annotations

from typing import Optional

_WHITESPACE = frozenset(b" \t\n\r")


def _quote(text: Optional[str]) -> str:
    if text is None:
        return "NULL"
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class HStore(dict):
    """A mapping of strings to strings, where a value of None means NULL."""

    @staticmethod
    def _store(
        target: "HStore", key: bytearray, val: bytearray, quoted: bool
    ) -> None:
        text = bytes(val).decode("utf-8", errors="surrogateescape")
        name = bytes(key).decode("utf-8", errors="surrogateescape")
        if not quoted and len(text) == 4 and text.lower() == "null":
            target[name] = None
        else:
            target[name] = text

    @classmethod
    def scan(cls, value: object) -> Optional["HStore"]:
        """Parse hstore text; a NULL column gives None."""
        if value is None:
            return None
        if isinstance(value, str):
            data = value.encode("utf-8", errors="surrogateescape")
        elif isinstance(value, (bytes, bytearray, memoryview)):
            data = bytes(value)
        else:
            raise TypeError(f"cannot scan {type(value).__name__} into HStore")

        result = cls()
        pair = [bytearray(), bytearray()]
        side = 0
        in_quote = False
        did_quote = False
        saw_slash = False

        for byte in data:
            if saw_slash:
                pair[side].append(byte)
                saw_slash = False
                continue
            if byte == 0x5C:  # backslash
                saw_slash = True
                continue
            if byte == 0x22:  # double quote
                in_quote = not in_quote
                did_quote = True
                continue
            if not in_quote:
                if byte in _WHITESPACE or byte == 0x3D:  # '='
                    continue
                if byte == 0x3E:  # '>'
                    side = 1
                    did_quote = False
                    continue
                if byte == 0x2C:  # ','
                    cls._store(result, pair[0], pair[1], did_quote)
                    pair = [bytearray(), bytearray()]
                    side = 0
                    continue
            pair[side].append(byte)

        if len(data) > 1:
            cls._store(result, pair[0], pair[1], did_quote)
        return result

    def value(self) -> bytes:
        """Render the map as hstore text."""
        parts = (f"{_quote(key)}=>{_quote(val)}" for key, val in self.items())
        return ",".join(parts).encode("utf-8", errors="surrogateescape")