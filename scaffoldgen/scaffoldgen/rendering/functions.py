"""Builtin helper functions available to every template.

Helpers are exposed twice: as globals called with the subject as the last
argument (``{{ trimSuffix("-svc", name) }}``) and as filters where the piped
value becomes that last argument (``{{ name | trimSuffix("-svc") }}``).
Filters Jinja2 already ships (``upper``, ``lower``, ``title``, ``join``,
``indent``, ``default``...) are left untouched, so the piped and the called
form of those names can differ: ``{{ text | indent(2) }}`` is Jinja2's filter
and skips the first line, while ``{{ indent(2, text) }}`` indents every line.

There is no clock or random helper: rendering is a pure function of template
and parameters.
"""

from __future__ import annotations

import base64
import datetime as dt
import hashlib
import json
import math
import re
from functools import wraps
from typing import Any, Callable

import yaml
from jinja2 import Environment

from ..core.values import stringify

_WORD_BOUNDARY = re.compile(r"[A-Z]?[a-z0-9]+|[A-Z]+(?![a-z])")
_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ns|us|µs|ms|s|m|h)")
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    if isinstance(value, (str, list, tuple, dict, set)):
        return len(value) == 0
    return False


def _words(text: str) -> list[str]:
    return _WORD_BOUNDARY.findall(stringify(text))


# --- strings


def trim(text: Any) -> str:
    return stringify(text).strip()


def trim_prefix(prefix: str, text: Any) -> str:
    text = stringify(text)
    return text[len(prefix):] if prefix and text.startswith(prefix) else text


def trim_suffix(suffix: str, text: Any) -> str:
    text = stringify(text)
    return text[: -len(suffix)] if suffix and text.endswith(suffix) else text


def upper(text: Any) -> str:
    return stringify(text).upper()


def lower(text: Any) -> str:
    return stringify(text).lower()


def title(text: Any) -> str:
    return stringify(text).title()


def untitle(text: Any) -> str:
    return " ".join(word[:1].lower() + word[1:] for word in stringify(text).split(" "))


def repeat(count: int, text: Any) -> str:
    return stringify(text) * int(count)


def substr(start: int, end: int, text: Any) -> str:
    text = stringify(text)
    if start < 0:
        return text[:end]
    if end < 0 or end > len(text):
        return text[start:]
    return text[start:end]


def trunc(length: int, text: Any) -> str:
    """Keep the first ``length`` characters, or the last ones when negative."""
    text = stringify(text)
    if length < 0:
        return text[length:]
    return text[:length]


def abbrev(width: int, text: Any) -> str:
    text = stringify(text)
    if width < 4 or len(text) <= width:
        return text
    return text[: width - 3] + "..."


def contains(needle: str, text: Any) -> bool:
    return needle in stringify(text)


def has_prefix(prefix: str, text: Any) -> bool:
    return stringify(text).startswith(prefix)


def has_suffix(suffix: str, text: Any) -> bool:
    return stringify(text).endswith(suffix)


def quote(*values: Any) -> str:
    return " ".join(json.dumps(stringify(v), ensure_ascii=False) for v in values if v is not None)


def squote(*values: Any) -> str:
    return " ".join(f"'{stringify(v)}'" for v in values if v is not None)


def cat(*values: Any) -> str:
    return " ".join(stringify(v) for v in values if v is not None)


def indent(spaces: int, text: Any) -> str:
    pad = " " * int(spaces)
    return "\n".join(pad + line for line in stringify(text).split("\n"))


def nindent(spaces: int, text: Any) -> str:
    return "\n" + indent(spaces, text)


def replace(old: str, new: str, text: Any) -> str:
    return stringify(text).replace(old, new)


def snakecase(text: Any) -> str:
    return "_".join(word.lower() for word in _words(text))


def kebabcase(text: Any) -> str:
    return "-".join(word.lower() for word in _words(text))


def camelcase(text: Any) -> str:
    return "".join(word[:1].upper() + word[1:].lower() for word in _words(text))


def nospace(text: Any) -> str:
    return "".join(stringify(text).split())


def initials(text: Any) -> str:
    return "".join(word[0] for word in stringify(text).split())


def plural(one: str, many: str, count: int) -> str:
    return one if count == 1 else many


def regex_match(regex: str, text: Any) -> bool:
    return re.search(regex, stringify(text)) is not None


def regex_find(regex: str, text: Any) -> str:
    match = re.search(regex, stringify(text))
    return match.group(0) if match else ""


def regex_replace_all(regex: str, text: Any, replacement: str) -> str:
    return re.sub(regex, replacement, stringify(text))


def b64enc(text: Any) -> str:
    return base64.b64encode(stringify(text).encode("utf-8")).decode("ascii")


def b64dec(text: Any) -> str:
    return base64.b64decode(stringify(text)).decode("utf-8")


def sha256sum(text: Any) -> str:
    return hashlib.sha256(stringify(text).encode("utf-8")).hexdigest()


# --- lists


def list_(*items: Any) -> list[Any]:
    return list(items)


def first(items: list[Any]) -> Any:
    return items[0] if items else None


def last(items: list[Any]) -> Any:
    return items[-1] if items else None


def rest(items: list[Any]) -> list[Any]:
    return list(items[1:])


def initial(items: list[Any]) -> list[Any]:
    return list(items[:-1])


def append(items: list[Any], value: Any) -> list[Any]:
    return [*items, value]


def prepend(items: list[Any], value: Any) -> list[Any]:
    return [value, *items]


def concat(*lists: list[Any]) -> list[Any]:
    return [item for items in lists for item in items]


def uniq(items: list[Any]) -> list[Any]:
    result: list[Any] = []
    for item in items:
        if item not in result:
            result.append(item)
    return result


def without(items: list[Any], *values: Any) -> list[Any]:
    return [item for item in items if item not in values]


def has(needle: Any, items: list[Any]) -> bool:
    return needle in items


def compact(items: list[Any]) -> list[Any]:
    return [item for item in items if not _is_empty(item)]


def sort_alpha(items: list[Any]) -> list[str]:
    return sorted(stringify(item) for item in items)


def split_list(separator: str, text: Any) -> list[str]:
    return stringify(text).split(separator)


def join(separator: str, items: Any) -> str:
    if isinstance(items, str):
        return items
    return separator.join(stringify(item) for item in items)


def until(count: int) -> list[int]:
    return list(range(int(count)))


def until_step(start: int, stop: int, step: int) -> list[int]:
    return list(range(int(start), int(stop), int(step)))


# --- dicts


def dict_(*pairs: Any, **kwargs: Any) -> dict[str, Any]:
    """Build a mapping from alternating keys and values."""
    result = {stringify(k): v for k, v in zip(pairs[::2], pairs[1::2])}
    if len(pairs) % 2:
        result[stringify(pairs[-1])] = ""
    result.update(kwargs)
    return result


def get(mapping: dict[str, Any], key: str) -> Any:
    return mapping.get(key, "")


def set_(mapping: dict[str, Any], key: str, value: Any) -> dict[str, Any]:
    return {**mapping, key: value}


def unset(mapping: dict[str, Any], key: str) -> dict[str, Any]:
    return {k: v for k, v in mapping.items() if k != key}


def has_key(mapping: dict[str, Any], key: str) -> bool:
    return key in mapping


def keys(*mappings: dict[str, Any]) -> list[str]:
    return [key for mapping in mappings for key in mapping]


def values(mapping: dict[str, Any]) -> list[Any]:
    return list(mapping.values())


def pick(mapping: dict[str, Any], *names: str) -> dict[str, Any]:
    return {k: v for k, v in mapping.items() if k in names}


def omit(mapping: dict[str, Any], *names: str) -> dict[str, Any]:
    return {k: v for k, v in mapping.items() if k not in names}


def merge(destination: dict[str, Any], *sources: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge mappings, earlier arguments take precedence."""
    result: dict[str, Any] = {}
    for source in reversed((destination, *sources)):
        for key, value in source.items():
            if isinstance(value, dict) and isinstance(result.get(key), dict):
                result[key] = merge(value, result[key])
            else:
                result[key] = value
    return result


# --- defaults and flow


def default(fallback: Any, given: Any = None) -> Any:
    return fallback if _is_empty(given) else given


def empty(value: Any) -> bool:
    return _is_empty(value)


def coalesce(*values: Any) -> Any:
    for value in values:
        if not _is_empty(value):
            return value
    return None


def ternary(true_value: Any, false_value: Any, condition: Any) -> Any:
    return true_value if condition else false_value


def required(message: str, value: Any) -> Any:
    if value is None or value == "":
        raise ValueError(message)
    return value


def fail(message: str) -> None:
    raise ValueError(message)


# --- math


def add(*numbers: Any) -> Any:
    return sum(numbers)


def add1(number: Any) -> Any:
    return number + 1


def sub(a: Any, b: Any) -> Any:
    return a - b


def mul(*numbers: Any) -> Any:
    return math.prod(numbers)


def div(a: Any, b: Any) -> Any:
    """Divide, truncating toward zero when both operands are integers."""
    if isinstance(a, int) and isinstance(b, int):
        quotient = abs(a) // abs(b)
        return quotient if (a >= 0) == (b >= 0) else -quotient
    return a / b


def mod(a: Any, b: Any) -> Any:
    if isinstance(a, int) and isinstance(b, int):
        return a - div(a, b) * b
    return math.fmod(a, b)


def max_(*numbers: Any) -> Any:
    return max(numbers)


def min_(*numbers: Any) -> Any:
    return min(numbers)


def floor(number: Any) -> float:
    return float(math.floor(float(number)))


def ceil(number: Any) -> float:
    return float(math.ceil(float(number)))


def round_(number: Any, precision: int = 0) -> float:
    return round(float(number), int(precision))


def atoi(text: Any) -> int:
    try:
        return int(stringify(text).strip())
    except ValueError:
        return 0


def int_(value: Any) -> int:
    if isinstance(value, str):
        try:
            return int(float(value.strip()))
        except ValueError:
            return 0
    return int(value or 0)


def float64(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


# --- encoding


def to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def to_pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def from_json(text: Any) -> Any:
    return json.loads(stringify(text))


def to_yaml(value: Any) -> str:
    dumped = yaml.safe_dump(value, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return dumped.removesuffix("\n...\n").rstrip("\n")


def from_yaml(text: Any) -> Any:
    return yaml.safe_load(stringify(text))


# --- dates


def _as_datetime(value: Any) -> dt.datetime:
    if isinstance(value, dt.datetime):
        return value
    if isinstance(value, dt.date):
        return dt.datetime(value.year, value.month, value.day, tzinfo=dt.timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return dt.datetime.fromtimestamp(value, tz=dt.timezone.utc)
    return dt.datetime.fromisoformat(stringify(value))


def _parse_duration(text: str) -> dt.timedelta:
    sign = -1.0 if text.startswith("-") else 1.0
    body = text.lstrip("+-")
    parts = _DURATION_PART.findall(body)
    if not parts or "".join(n + u for n, u in parts) != body:
        raise ValueError(f"invalid duration: {text!r}")
    seconds = sign * sum(float(number) * _DURATION_UNITS[unit] for number, unit in parts)
    return dt.timedelta(seconds=seconds)


def date(fmt: str, value: Any) -> str:
    """Format a date, epoch seconds or ISO-8601 string with ``strftime`` codes."""
    return _as_datetime(value).strftime(fmt)


def to_date(fmt: str, text: Any) -> dt.datetime:
    return dt.datetime.strptime(stringify(text), fmt)


def unix_epoch(value: Any) -> int:
    moment = _as_datetime(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dt.timezone.utc)
    return int(moment.timestamp())


def date_modify(duration: str, value: Any) -> dt.datetime:
    return _as_datetime(value) + _parse_duration(duration)


def duration_seconds(duration: str) -> float:
    return _parse_duration(duration).total_seconds()


FUNCTIONS: dict[str, Callable[..., Any]] = {
    "trim": trim,
    "trimPrefix": trim_prefix,
    "trimSuffix": trim_suffix,
    "upper": upper,
    "lower": lower,
    "title": title,
    "untitle": untitle,
    "repeat": repeat,
    "substr": substr,
    "trunc": trunc,
    "abbrev": abbrev,
    "contains": contains,
    "hasPrefix": has_prefix,
    "hasSuffix": has_suffix,
    "quote": quote,
    "squote": squote,
    "cat": cat,
    "indent": indent,
    "nindent": nindent,
    "replace": replace,
    "snakecase": snakecase,
    "kebabcase": kebabcase,
    "camelcase": camelcase,
    "nospace": nospace,
    "initials": initials,
    "plural": plural,
    "regexMatch": regex_match,
    "regexFind": regex_find,
    "regexReplaceAll": regex_replace_all,
    "b64enc": b64enc,
    "b64dec": b64dec,
    "sha256sum": sha256sum,
    "toString": stringify,
    "list": list_,
    "first": first,
    "last": last,
    "rest": rest,
    "initial": initial,
    "append": append,
    "prepend": prepend,
    "concat": concat,
    "uniq": uniq,
    "without": without,
    "has": has,
    "compact": compact,
    "sortAlpha": sort_alpha,
    "splitList": split_list,
    "join": join,
    "until": until,
    "untilStep": until_step,
    "dict": dict_,
    "get": get,
    "set": set_,
    "unset": unset,
    "hasKey": has_key,
    "keys": keys,
    "values": values,
    "pick": pick,
    "omit": omit,
    "merge": merge,
    "default": default,
    "empty": empty,
    "coalesce": coalesce,
    "ternary": ternary,
    "required": required,
    "fail": fail,
    "add": add,
    "add1": add1,
    "sub": sub,
    "mul": mul,
    "div": div,
    "mod": mod,
    "max": max_,
    "min": min_,
    "floor": floor,
    "ceil": ceil,
    "round": round_,
    "atoi": atoi,
    "int": int_,
    "float64": float64,
    "toJson": to_json,
    "toPrettyJson": to_pretty_json,
    "fromJson": from_json,
    "toYaml": to_yaml,
    "fromYaml": from_yaml,
    "date": date,
    "toDate": to_date,
    "unixEpoch": unix_epoch,
    "dateModify": date_modify,
    "durationSeconds": duration_seconds,
}


def _piped(function: Callable[..., Any]) -> Callable[..., Any]:
    """Adapt a helper so a filter's input is passed as its last argument."""

    @wraps(function)
    def filter_(value: Any, *args: Any) -> Any:
        return function(*args, value)

    return filter_


def register(env: Environment) -> None:
    """Install the helper library into a Jinja2 environment.

    Args:
        env: Environment to extend in place
    """
    env.globals.update(FUNCTIONS)
    for name, function in FUNCTIONS.items():
        if name not in env.filters:
            env.filters[name] = _piped(function)
