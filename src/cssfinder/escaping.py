from __future__ import annotations


def _is_ascii_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_ascii_word(char: str) -> bool:
    return _is_ascii_digit(char) or "a" <= char.lower() <= "z" or char in ("-", "_")


def css_escape(value: str) -> str:
    """Serialize ``value`` as a CSS identifier, following ``CSS.escape()``."""
    escaped: list[str] = []
    first = value[:1]
    for index, char in enumerate(value):
        code = ord(char)
        if code == 0:
            escaped.append("\ufffd")
        elif 0x01 <= code <= 0x1F or code == 0x7F:
            escaped.append(f"\\{code:x} ")
        elif index == 0 and _is_ascii_digit(char):
            escaped.append(f"\\{code:x} ")
        elif index == 1 and first == "-" and _is_ascii_digit(char):
            escaped.append(f"\\{code:x} ")
        elif index == 0 and char == "-" and len(value) == 1:
            escaped.append("\\-")
        elif code >= 0x80 or _is_ascii_word(char):
            escaped.append(char)
        else:
            escaped.append(f"\\{char}")
    return "".join(escaped)


def id_selector(value: str) -> str:
    return f"#{css_escape(value)}"


def class_selector(value: str) -> str:
    return f".{css_escape(value)}"


def attribute_selector(name: str, value: str) -> str:
    return f'[{css_escape(name)}="{css_escape(value)}"]'


def nth_child(name: str, position: int) -> str:
    return f"{name}:nth-child({position})"
