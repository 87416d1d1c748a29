"""Initialization of a recurrence rule from text or a mapping.

An input rule like 'FREQ=YEARLY;BYMONTH=4' is first broken into a mapping
of lower case keys to values, one part at a time with `add_part_to_hash`,
then the mapping is applied to the rule with `initialize_from_hash`.

Neither step raises for bad content. Parts without '=', unknown keys and
rules that have both COUNT and UNTIL are recorded as parse problems and
reported through the error list of the rule.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar

from .exceptions import ConflictingBound, MalformedPart, RecurValidationError, UnrecognizedKey

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "HashInitialization",
]


class HashInitialization:
    """Capability that dispatches key/value pairs onto field setters.

    The host lists the keys it accepts in `HASH_KEYS`, each the name of a
    settable attribute.
    """

    HASH_KEYS: ClassVar[tuple[str, ...]] = ()

    _parse_problems: list[RecurValidationError] | None = None

    @property
    def parse_problems(self) -> list[RecurValidationError]:
        """Problems found while initializing, kept until the next full parse."""
        if self._parse_problems is None:
            self._parse_problems = []
        return self._parse_problems

    def clear_parse_problems(self) -> None:
        """Forget problems from a previous parse."""
        self._parse_problems = None

    def discard_parse_problems(self, kind: type[RecurValidationError]) -> None:
        """Forget parse problems of one kind that no longer describe the state."""
        if self._parse_problems:
            self._parse_problems = [
                problem for problem in self._parse_problems if not isinstance(problem, kind)
            ]

    def reset_errors(self) -> None:
        """Clear the error list of the host."""
        raise NotImplementedError

    def _record_problem(self, problem: RecurValidationError) -> None:
        self.parse_problems.append(problem)
        self.reset_errors()

    def add_part_to_hash(self, value_hash: dict[str, Any], part: str) -> dict[str, Any]:
        """Parse one KEY=VALUE part into the mapping.

        A repeated key replaces the earlier value.
        """
        if not part.strip():
            return value_hash
        key, sep, value = part.partition("=")
        if not sep:
            _LOGGER.debug("Recurrence rule part missing '=': %s", part)
            self._record_problem(MalformedPart(part))
            return value_hash
        value_hash[key.strip().lower()] = value.strip()
        return value_hash

    def initialize_from_hash(self, value_hash: Mapping[str, Any]) -> None:
        """Assign each mapping entry to the matching field setter."""
        bounds = [
            key.lower()
            for key, value in value_hash.items()
            if key.lower() in ("count", "until") and value is not None
        ]
        for key, value in value_hash.items():
            attr = key.lower()
            if attr not in self.HASH_KEYS:
                _LOGGER.debug("Ignoring unrecognized recurrence rule part %s", key)
                self._record_problem(UnrecognizedKey(key))
                continue
            setattr(self, attr, value)
        # After dispatch, the bound setters discard ConflictingBound
        if len(bounds) > 1:
            kept = bounds[-1]
            _LOGGER.debug("Both COUNT and UNTIL specified, keeping %s", kept)
            self._record_problem(ConflictingBound(kept))
