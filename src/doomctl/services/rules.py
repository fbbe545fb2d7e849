"""RuleService: inspect the rule set and try it against a hypothetical file."""

from __future__ import annotations

import logging

from doomctl.domain.errors import ParseError
from doomctl.domain.rules import FileMetadata
from doomctl.domain.units import format_duration, parse_duration, parse_size
from doomctl.services.base import BaseService
from doomctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class RuleService(BaseService):
    """Read-only operations over the job's rule set."""

    def list_rules(self) -> ServiceResult:
        rules = self._options.rules
        items = [{"index": i, **rule.describe()} for i, rule in enumerate(rules)]
        return ServiceResult(
            ok=True,
            op="list_rules",
            data={"policy": str(rules.policy), "count": len(items), "items": items},
        )

    def test(self, name: str, *, size: str, age: str) -> ServiceResult:
        """Evaluate the rule set for a file called *name*.

        *size* and *age* use the same unit syntax as the rules themselves
        (``150M``, ``8d``).  Malformed input is an ``ok=False`` result
        carrying the parse error code.
        """
        op = "test_rule"
        try:
            size_bytes = parse_size(size)
            file_age = parse_duration(age)
        except ParseError as exc:
            logger.debug("Rejected test input: %s", exc)
            return ServiceResult.failure(op, exc.code, str(exc), value=exc.value)

        meta = FileMetadata(name=name, size_bytes=size_bytes, age=file_age)
        rules = self._options.rules
        matched = rules.matching(meta)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "name": name,
                "size_bytes": size_bytes,
                "age": format_duration(file_age),
                "policy": str(rules.policy),
                "matched": matched,
                "delete": rules.should_delete(meta),
            },
        )
