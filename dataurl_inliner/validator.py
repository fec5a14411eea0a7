import logging
from typing import Optional

from dataurl_inliner.constants import REMOTE_PATTERN
from dataurl_inliner.processors import get_extension
from dataurl_inliner.rules import RuleConfig, any_match

logger = logging.getLogger(__name__)


def is_remote(reference: str) -> bool:
    return bool(REMOTE_PATTERN.match(reference))


class EligibilityValidator:
    """Decides whether a reference may be inlined under a rule set."""

    def __init__(self, rules: RuleConfig):
        self._rules = rules

    @property
    def rules(self) -> RuleConfig:
        return self._rules

    def is_eligible(self, reference: Optional[str]) -> bool:
        if not reference:
            return False

        rules = self._rules

        if is_remote(reference) and not rules.remote:
            logger.debug(f"Rejected remote reference: {reference}")
            return False

        if rules.extensions is not None and get_extension(reference) not in rules.extensions:
            logger.debug(f"Rejected by extension: {reference}")
            return False

        if rules.include is not None and not any_match(rules.include, reference):
            logger.debug(f"Not matched by include rules: {reference}")
            return False

        # exclude is evaluated last so it wins over include
        if rules.exclude is not None and any_match(rules.exclude, reference):
            logger.debug(f"Matched by exclude rules: {reference}")
            return False

        return True
