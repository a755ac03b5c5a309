from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MemberPercentage:
    member_id: str
    name: str
    percentage: int

    def to_dict(self) -> dict:
        return {"name": self.name, "percentage": self.percentage}


@dataclass(frozen=True)
class DashboardStats:
    total_members: int
    total_shows: int
    recent_attendance: int
    active_notifications: int

    def to_dict(self) -> dict:
        return {
            "totalMembers": self.total_members,
            "totalShows": self.total_shows,
            "recentAttendance": self.recent_attendance,
            "activeNotifications": self.active_notifications,
        }


@dataclass(frozen=True)
class ReportStats:
    total_members: int
    average_attendance: int
    top_performers: list[MemberPercentage] = field(default_factory=list)
    low_performers: list[MemberPercentage] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalMembers": self.total_members,
            "averageAttendance": self.average_attendance,
            "topPerformers": [p.to_dict() for p in self.top_performers],
            "lowPerformers": [p.to_dict() for p in self.low_performers],
        }
