from __future__ import annotations

import re
from math import log2
from typing import Any, Iterable

from .models import AttrPredicate, FinderOptions, build_options

ROOT_ID_BLOCKLIST = {"__next", "root", "app", "__nuxt", "gatsby-focus-wrapper"}

TEST_ATTR_PRIORITY = (
    "data-testid",
    "data-test",
    "data-qa",
    "data-cy",
    "data-e2e",
)

_FRAMEWORK_TOKEN_PATTERNS = (
    re.compile(r"(^|[-_:])(mui|css|ng|react|vue|ember|svelte|jdt|j_idt|sc)([-_:]|$)", re.IGNORECASE),
    re.compile(r"^ant-[a-z0-9_-]+$", re.IGNORECASE),
)

_DYNAMIC_CLASS_PATTERNS = (
    re.compile(r"^css-[a-z0-9_-]{4,}$", re.IGNORECASE),
    re.compile(r"^jss\d+$", re.IGNORECASE),
    re.compile(r"^sc-[a-z0-9]+$", re.IGNORECASE),
    re.compile(r"^[a-f0-9]{8,}$", re.IGNORECASE),
    re.compile(r"^[a-z]+__[a-z]+___[a-z0-9]{5,}$", re.IGNORECASE),
)

_UUID_PATTERN = re.compile(r"[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}", re.IGNORECASE)


def shannon_entropy(value: str) -> float:
    text = value.strip()
    if not text:
        return 0.0
    total = len(text)
    frequencies: dict[str, int] = {}
    for char in text:
        frequencies[char] = frequencies.get(char, 0) + 1

    entropy = 0.0
    for count in frequencies.values():
        probability = count / total
        entropy -= probability * log2(probability)
    return entropy


def digit_ratio(value: str) -> float:
    text = value.strip()
    if not text:
        return 0.0
    return sum(1 for char in text if char.isdigit()) / len(text)


def has_framework_fingerprint(value: str) -> bool:
    return any(pattern.search(value) for pattern in _FRAMEWORK_TOKEN_PATTERNS)


def has_hash_like_pattern(value: str) -> bool:
    if re.search(r"[a-f0-9]{10,}", value, flags=re.IGNORECASE):
        return True
    return bool(re.fullmatch(r"[a-f0-9]{8,}", value, flags=re.IGNORECASE) or _UUID_PATTERN.fullmatch(value))


def dynamic_value_reasons(value: str) -> tuple[str, ...]:
    """Why ``value`` looks generated; empty when it looks hand-written."""
    text = re.sub(r"\s+", " ", value).strip()
    if not text:
        return ("empty",)

    reasons: list[str] = []
    if digit_ratio(text) > 0.4:
        reasons.append("digit-ratio>40%")
    if len(text) >= 8 and shannon_entropy(text) >= 4.2:
        reasons.append("high-entropy")
    if has_framework_fingerprint(text):
        reasons.append("framework-token")
    if has_hash_like_pattern(text):
        reasons.append("hash-like")
    if re.search(r"[_:-]\d{3,}$", text):
        reasons.append("numeric-drift-suffix")
    if re.fullmatch(r"\d+", text):
        reasons.append("numeric-only")
    return tuple(reasons)


def is_dynamic_value(value: str) -> bool:
    return bool(dynamic_value_reasons(value))


def is_dynamic_class_token(token: str) -> bool:
    value = token.strip()
    if not value:
        return True
    if any(pattern.match(value) for pattern in _DYNAMIC_CLASS_PATTERNS):
        return True
    if len(value) > 18 and re.search(r"\d", value):
        return True
    if value.count("-") >= 3 and re.search(r"\d", value):
        return True
    return False


def is_dynamic_id_value(id_value: str) -> bool:
    value = id_value.strip()
    if not value:
        return True
    if value.lower() in ROOT_ID_BLOCKLIST:
        return True
    # JSF / PrimeFaces generated ids
    if ":" in value and re.search(r"(:\d+:|:j_idt\d+|:jdt_\d+)", value, flags=re.IGNORECASE):
        return True
    return is_dynamic_value(value)


def stable_id_name(name: str) -> bool:
    return not is_dynamic_id_value(name)


def stable_class_name(name: str) -> bool:
    return not is_dynamic_class_token(name)


def stable_attribute_filter(names: Iterable[str] = TEST_ATTR_PRIORITY) -> AttrPredicate:
    """Accept only the given attributes, and only with stable values."""
    allowed = {name.lower() for name in names}

    def accept(name: str, value: str) -> bool:
        return name.lower() in allowed and not is_dynamic_value(value)

    return accept


def stable_options(**overrides: Any) -> FinderOptions:
    defaults: dict[str, Any] = {
        "id_name": stable_id_name,
        "class_name": stable_class_name,
        "attr": stable_attribute_filter(),
    }
    defaults.update(overrides)
    return build_options(defaults)
