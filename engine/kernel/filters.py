"""
VO Foundry Views Kernel — Filter Evaluator

Pure function: (row, filter) → bool

A view's filter is one of two tagged variants:

  Predicate(fn)    legacy direct predicate, called as-is
  RuleSet(rules)   declarative {field, op, value} rules, AND-combined

Rule operators:
  eq        string-coerced equality
  ne        negation of eq
  contains  case-insensitive substring
  regex     case-insensitive search; a malformed pattern matches everything
  in        raw membership in a list value

Unknown operators match everything. A broken user-authored filter must
never hide data, so every ambiguity fails open.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from engine.kernel.types import AssetRow, as_text, row_value

logger = logging.getLogger(__name__)

FILTER_OPS: frozenset[str] = frozenset({"eq", "ne", "contains", "regex", "in"})


# ---------------------------------------------------------------------------
# Filter variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FilterRule:
    field: str
    op: str
    value: Any = None

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> FilterRule:
        field_name, op = d.get("field") or "", d.get("op") or ""
        if not isinstance(field_name, str) or not isinstance(op, str):
            raise ValueError("Filter rule 'field' and 'op' must be strings")
        return cls(field=field_name, op=op, value=d.get("value"))

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "op": self.op, "value": self.value}


@dataclass(frozen=True)
class RuleSet:
    rules: tuple[FilterRule, ...] = ()


@dataclass(frozen=True)
class Predicate:
    fn: Callable[[AssetRow], bool]


Filter = Predicate | RuleSet


def coerce_filter(raw: Any) -> Filter | None:
    """
    Normalize a filter from its stored or in-code form.

      None                 → None (pass everything)
      Predicate / RuleSet  → unchanged
      callable             → Predicate
      list of rule dicts   → RuleSet

    Raises ValueError for anything else.
    """
    if raw is None or isinstance(raw, (Predicate, RuleSet)):
        return raw
    if callable(raw):
        return Predicate(raw)
    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        rules = []
        for r in raw:
            if isinstance(r, FilterRule):
                rules.append(r)
            elif isinstance(r, Mapping):
                rules.append(FilterRule.from_dict(r))
            else:
                raise ValueError(f"Filter rule must be an object, got {type(r).__name__}")
        return RuleSet(tuple(rules))
    raise ValueError(f"Unsupported filter type: {type(raw).__name__}")


def validate_filter(raw: Any) -> list[str]:
    """
    Structural validation for a stored filter.
    Returns a list of error strings. Empty list = valid.

    The evaluator itself tolerates every one of these; this is for
    boundaries that want to reject bad input up front.
    """
    if raw is None or isinstance(raw, Predicate) or callable(raw):
        return []
    if isinstance(raw, RuleSet):
        raw = [r.to_dict() for r in raw.rules]
    if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)):
        return ["filter must be a list of rules"]

    errors: list[str] = []
    for i, r in enumerate(raw):
        if isinstance(r, FilterRule):
            r = r.to_dict()
        if not isinstance(r, Mapping):
            errors.append(f"filter[{i}] must be an object")
            continue
        if not r.get("field"):
            errors.append(f"filter[{i}] requires 'field'")
        op = r.get("op")
        if not op:
            errors.append(f"filter[{i}] requires 'op'")
        elif not isinstance(op, str) or op not in FILTER_OPS:
            errors.append(f"filter[{i}] has unknown op: {op}")
        elif op == "in" and not isinstance(r.get("value"), (list, tuple)):
            errors.append(f"filter[{i}] op 'in' requires a list value")
    return errors


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


def apply_filters(row: AssetRow, filter: Filter | None) -> bool:
    """
    True when the row passes the filter.
    Exceptions raised by a Predicate propagate to the caller.
    """
    if filter is None:
        return True
    if isinstance(filter, Predicate):
        return bool(filter.fn(row))
    if isinstance(filter, RuleSet):
        return all(_match_rule(row, rule) for rule in filter.rules)
    raise TypeError(f"Unsupported filter: {filter!r}")


def filter_rows(rows: Iterable[AssetRow], filter: Filter | None) -> list[AssetRow]:
    if filter is None:
        return list(rows)
    return [row for row in rows if apply_filters(row, filter)]


def _match_rule(row: AssetRow, rule: FilterRule) -> bool:
    raw = row_value(row, rule.field)
    op = rule.op

    if op == "eq":
        return as_text(raw) == as_text(rule.value)
    if op == "ne":
        return as_text(raw) != as_text(rule.value)
    if op == "contains":
        return as_text(rule.value).lower() in as_text(raw).lower()
    if op == "regex":
        pattern = _compile(as_text(rule.value))
        if pattern is None:
            return True
        return pattern.search(as_text(raw)) is not None
    if op == "in":
        if not isinstance(rule.value, (list, tuple)):
            return True
        return raw in rule.value
    return True


@lru_cache(maxsize=256)
def _compile(source: str) -> re.Pattern[str] | None:
    """Compile a user regex once. None if the pattern is malformed."""
    try:
        return re.compile(source, re.IGNORECASE)
    except re.error as e:
        logger.debug("filters: ignoring malformed regex %r: %s", source, e)
        return None
