from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceStatus
from .strategies.absent_policy import AbsentPolicy
from .strategies.base import StatusPolicy
from .strategies.present_policy import PresentPolicy
from .strategies.replaced_policy import ReplacedPolicy


@dataclass
class StatusPolicyFactory:
    """Factory Pattern: choose the policy for a status."""

    def for_status(self, status: AttendanceStatus) -> StatusPolicy:
        if status == AttendanceStatus.ABSENT:
            return AbsentPolicy()
        if status == AttendanceStatus.REPLACED:
            return ReplacedPolicy()
        return PresentPolicy()
