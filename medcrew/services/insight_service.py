"""Health insights service."""

from typing import List

from medcrew.agents.insight_agent import get_health_insight
from medcrew.services.base import BusyFlag, require

MAX_PAST_INSIGHTS = 3


class InsightService:
    def __init__(self):
        self.insight = ""
        self.past_insights: List[str] = []
        self.busy = BusyFlag("health-insights")

    async def generate(self, diary_entry: str) -> str:
        entry = require(diary_entry, "Please write a diary entry first.")
        with self.busy.hold():
            self.insight = ""
            self.insight = await get_health_insight(entry)
        self.past_insights = [self.insight, *self.past_insights][:MAX_PAST_INSIGHTS]
        return self.insight
