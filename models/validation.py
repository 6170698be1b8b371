"""
Check result models
"""

from pydantic import BaseModel, Field
from typing import List
from enum import Enum
from datetime import datetime


class CheckStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    SKIPPED = "SKIPPED"


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class CheckResult(BaseModel):
    """Result of a single consistency check"""
    check_id: str
    check_name: str
    status: CheckStatus
    reasoning: str
    severity: Severity = Severity.MEDIUM
    timestamp: datetime = Field(default_factory=datetime.now)


class CategoryResult(BaseModel):
    """Result of a group of checks"""
    category: str
    category_name: str
    checks: List[CheckResult]
    passed_count: int = 0
    failed_count: int = 0
    skipped_count: int = 0

    def __init__(self, **data):
        super().__init__(**data)
        self._calculate_stats()

    def _calculate_stats(self):
        """Calculate category statistics"""
        if not self.checks:
            return

        self.passed_count = len([c for c in self.checks if c.status == CheckStatus.PASS])
        self.failed_count = len([c for c in self.checks if c.status == CheckStatus.FAIL])
        self.skipped_count = len([c for c in self.checks if c.status == CheckStatus.SKIPPED])

    @property
    def all_passed(self) -> bool:
        return self.failed_count == 0

    def get_check(self, check_id: str) -> CheckResult:
        return next(c for c in self.checks if c.check_id == check_id)

    def get_critical_issues(self) -> List[CheckResult]:
        """Failed checks with HIGH or CRITICAL severity"""
        return [
            c for c in self.checks
            if c.status == CheckStatus.FAIL and c.severity in [Severity.HIGH, Severity.CRITICAL]
        ]
