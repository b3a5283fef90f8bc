import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from flowcaser.config import FlowcaserConfig  # noqa: E402
from flowcaser.models import Bug, FeatureRequest, KnowledgeCase, Team, TimeLog  # noqa: E402
from flowcaser.store import DataStore  # noqa: E402


class FakeStore(DataStore):
    """In-memory DataStore; lists are returned in insertion order (newest first by convention)."""

    def __init__(self, bugs=None, features=None, knowledge=None, time_logs=None, team=None):
        self.bugs = list(bugs or [])
        self.features = list(features or [])
        self.knowledge = list(knowledge or [])
        self.time_logs = list(time_logs or [])
        self.team = team
        self.turns = []
        self.fail = set()
        self.calls = []

    def _maybe_fail(self, name):
        self.calls.append(name)
        if name in self.fail:
            raise RuntimeError(f"{name} unavailable")

    def list_bugs(self, team_id, limit=50):
        self._maybe_fail("bugs")
        return [b for b in self.bugs if b.team_id == team_id][:limit]

    def list_features(self, team_id, limit=50):
        self._maybe_fail("features")
        return [f for f in self.features if f.team_id == team_id][:limit]

    def list_knowledge(self, team_id, limit=50):
        self._maybe_fail("knowledge")
        return [k for k in self.knowledge if k.team_id == team_id][:limit]

    def list_time_logs(self, team_id, limit=100):
        self._maybe_fail("time_logs")
        return [t for t in self.time_logs if t.team_id == team_id][:limit]

    def get_team(self, team_id):
        self._maybe_fail("team")
        if self.team is not None and self.team.id == team_id:
            return self.team
        return None

    def append_conversation_turn(self, turn):
        self._maybe_fail("append")
        self.turns.append(turn)

    def load_conversation_history(self, team_id, limit=50):
        self._maybe_fail("history")
        return [t for t in self.turns if t.team_id == team_id][-limit:]


TEAM_ID = "team-1"


def make_bug(i, title, status="open", priority="medium", description="", team_id=TEAM_ID):
    return Bug(id=f"b{i}", title=title, description=description, status=status, priority=priority, team_id=team_id)


def make_feature(i, title, status="pending", votes=0, description="", team_id=TEAM_ID):
    return FeatureRequest(id=f"f{i}", title=title, description=description, status=status, votes=votes, team_id=team_id)


def make_knowledge(i, title, category="Guide", content="", team_id=TEAM_ID):
    return KnowledgeCase(id=f"k{i}", title=title, content=content, category=category, team_id=team_id)


def make_time_log(i, description, hours, date="2025-01-10", project=None, team_id=TEAM_ID):
    return TimeLog(id=f"t{i}", description=description, hours=hours, date=date, project=project, team_id=team_id)


@pytest.fixture
def store():
    return FakeStore(team=Team(id=TEAM_ID, name="Kernen", description="Platformsteamet."))


@pytest.fixture
def local_config():
    return FlowcaserConfig(llm_api_key=None, random_seed=7)


@pytest.fixture
def remote_config():
    return FlowcaserConfig(llm_api_key="sk-test", llm_retries=0, random_seed=7)
